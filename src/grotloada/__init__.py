"""
grotloada — manage the Total War launcher mod list and saved mod profiles.

The library lives in Utils/ (mod_data, mod_file, profiles, config_paths);
this package holds the command line (python -m grotloada) and the GUI
launcher (grotloada.app).
"""

__version__ = "0.3.0"
