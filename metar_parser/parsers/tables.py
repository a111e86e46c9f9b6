"""
Code tables for the METAR group grammars.

The tables are read-only and shared by every parse.
"""

from types import MappingProxyType

from metar_parser.models.units import DistanceUnit, SpeedUnit
from metar_parser.models.groups import (
    Comparator,
    Tendency,
    Modifier,
    Descriptor,
    Phenomenon,
    SkyQuantity,
    CloudType,
)
from metar_parser.models.report import ObserverMode

OBSERVER_CODES = MappingProxyType({
    'AUTO': ObserverMode.AUTO,
    'COR': ObserverMode.CORRECTED,
})

MODIFIERS = MappingProxyType({
    '+': Modifier.HEAVY,
    '-': Modifier.LIGHT,
    'VC': Modifier.NEARBY,
})

DESCRIPTORS = MappingProxyType({
    'BC': Descriptor.PATCHES_OF,
    'BL': Descriptor.BLOWING,
    'DR': Descriptor.LOW_DRIFTING,
    'FZ': Descriptor.FREEZING,
    'MI': Descriptor.SHALLOW,
    'PR': Descriptor.PARTIAL,
    'SH': Descriptor.SHOWER_OF,
    'TS': Descriptor.THUNDERSTORM_AND,
})

PHENOMENA = MappingProxyType({
    'BR': Phenomenon.MIST,
    'DU': Phenomenon.DUST,
    'DZ': Phenomenon.DRIZZLE,
    'FG': Phenomenon.FOG,
    'FU': Phenomenon.SMOKE,
    'GR': Phenomenon.HAIL,
    'GS': Phenomenon.SMALL_HAIL,
    'HZ': Phenomenon.HAZE,
    'IC': Phenomenon.ICE_CRYSTALS,
    'PL': Phenomenon.ICE_PELLETS,
    'PO': Phenomenon.DUST_WHIRLS,
    'PY': Phenomenon.SPRAY,  # US only
    'RA': Phenomenon.RAIN,
    'SA': Phenomenon.SAND,
    'SH': Phenomenon.SHOWER,
    'SN': Phenomenon.SNOW,
    'SG': Phenomenon.SNOW_GRAINS,
    'SNRA': Phenomenon.SNOW_AND_RAIN,
    'SQ': Phenomenon.SQUALL,
    'UP': Phenomenon.UNKNOWN_PHENOMENON,  # automatic stations
    'VA': Phenomenon.VOLCANIC_ASH,
    'FC': Phenomenon.FUNNEL_CLOUD,
    'SS': Phenomenon.SAND_STORM,
    'DS': Phenomenon.DUST_STORM,
    'TS': Phenomenon.THUNDERSTORM,
    # Unreachable through the grammar (TS matches as a descriptor); the keys stay in the vocabulary
    'TSGR': Phenomenon.THUNDERSTORM_AND_HAIL,
    'TSGS': Phenomenon.THUNDERSTORM_AND_SMALL_HAIL,
    'TSRA': Phenomenon.THUNDERSTORM_AND_RAIN,
    'NSW': Phenomenon.NO_SIGNIFICANT_WEATHER,
})

SKY_QUANTITIES = MappingProxyType({
    'BKN': SkyQuantity.BROKEN,
    'FEW': SkyQuantity.FEW,
    'OVC': SkyQuantity.OVERCAST,
    'SCT': SkyQuantity.SCATTERED,
})

# Codes meaning no cloud layer (NSC/NCD are WMO, CLR/SKC are US)
CLEAR_SKY_CODES = frozenset({'NSC', 'NCD', 'CLR', 'SKC'})

# '///' means the type could not be observed; an absent suffix is keyed by ''
CLOUD_TYPES = MappingProxyType({
    'CB': CloudType.CUMULONIMBUS,
    'TCU': CloudType.TOWERING_CUMULUS,
    '///': None,
    '': None,
})

RVR_COMPARATORS = MappingProxyType({
    '': None,
    'P': Comparator.MORE_THAN,
    'M': Comparator.LESS_THAN,
})

RVR_TENDENCIES = MappingProxyType({
    '': None,
    'N': Tendency.NO_CHANGE,
    'U': Tendency.IMPROVING,
    'D': Tendency.WORSENING,
})

RVR_UNITS = MappingProxyType({
    '': DistanceUnit.METERS,
    'FT': DistanceUnit.FEET,
})

# A bare speed with no unit suffix is in km/h
SPEED_UNITS = MappingProxyType({
    '': SpeedUnit.KILOMETERS_PER_HOUR,
    'KMH': SpeedUnit.KILOMETERS_PER_HOUR,
    'MPS': SpeedUnit.METERS_PER_SECOND,
    'KT': SpeedUnit.KNOTS,
})
