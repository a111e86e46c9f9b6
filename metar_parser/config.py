"""
Configuration for the METAR parser.

Display units can be overridden through the environment; every other value
is a fixed conversion constant.
"""

import os

# Display units
DISTANCE_UNITS = os.getenv("METAR_DISTANCE_UNITS", "kilometers")
HEIGHT_UNITS = os.getenv("METAR_HEIGHT_UNITS", "meters")

# Length conversions
METERS_PER_KILOMETER = 1000.0
METERS_PER_MILE = 1609.344
METERS_PER_FOOT = 0.3048

# Cloud base and vertical visibility are coded in hundreds of feet,
# taken as 30 m per unit
METERS_PER_HEIGHT_UNIT = 30.0

# Pressure conversion
HECTOPASCALS_PER_INCH_OF_MERCURY = 33.8639

# Speed conversions
METERS_PER_SECOND_PER_KNOT = 0.514444
METERS_PER_SECOND_PER_KILOMETER_PER_HOUR = 1 / 3.6

# Value reported by '9999' and CAVOK
MORE_THAN_10KM_METERS = 10000.0
