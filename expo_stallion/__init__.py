"""
expo-stallion: install the Stallion bundle provider into Expo native projects.

Patches the generated Android ``MainApplication`` and iOS ``AppDelegate`` entry
files so that release builds load their JS bundle through Stallion, and writes
the Stallion credentials into the native string and plist resources.
"""

__version__ = "1.0.0"
__author__ = "Stallion Team"
