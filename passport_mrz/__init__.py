"""Passport MRZ (ICAO 9303 TD3) reader."""
