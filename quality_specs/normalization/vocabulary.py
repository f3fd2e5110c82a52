"""
Static lookup tables for quality specification parsing.

All tables map a lowercase phrase to its canonical form. Normalizers
take a copy and extend it from configuration.
"""

from typing import Dict, List


# Canonical comparison operators
GE = '≥'
LE = '≤'
GT = '>'
LT = '<'

CANONICAL_OPERATORS = (GE, LE, GT, LT)

# Word and abbreviation forms of comparisons.
# Longest phrases are matched first, so "less than or equal to" wins over
# "less than" regardless of insertion order.
OPERATOR_PHRASES: Dict[str, str] = {
    'greater than or equal to': GE,
    'greater than or equal': GE,
    'greater or equal to': GE,
    'greater or equal': GE,
    'not less than': GE,
    'no less than': GE,
    'at least': GE,
    'minimum': GE,
    'min.': GE,
    'min': GE,
    'nlt': GE,
    'less than or equal to': LE,
    'less than or equal': LE,
    'less or equal to': LE,
    'less or equal': LE,
    'not more than': LE,
    'no more than': LE,
    'at most': LE,
    'maximum': LE,
    'max.': LE,
    'max': LE,
    'nmt': LE,
    'greater than': GT,
    'more than': GT,
    'above': GT,
    'less than': LT,
    'under': LT,
    'below': LT,
}

# ASCII digraphs, rewritten wherever they appear
SYMBOL_OPERATORS: Dict[str, str] = {
    '>=': GE,
    '=>': GE,
    '<=': LE,
    '=<': LE,
}

# Words that link an attribute name to its value
CONNECTOR_WORDS = (
    'is', 'are', 'was', 'were', 'of', 'be', 'must', 'should', 'by', 'via', 'using',
)

# Conformance verbs and the value they render as
CONFORMANCE_VERBS: Dict[str, str] = {
    'conforms to': 'Conforms',
    'conform to': 'Conforms',
    'complies with': 'Complies',
    'comply with': 'Complies',
    'confirms': 'Confirms',
    'confirm': 'Confirms',
    'matches': 'Matches',
    'match': 'Matches',
}

# Words that flag vendor-supplied data
VENDOR_KEYWORDS: List[str] = ['vendor']

# Proper casing for analytical methods
METHOD_CASING: Dict[str, str] = {
    # Chromatography
    'gc': 'GC',
    'hplc': 'HPLC',
    'tlc': 'TLC',
    'gc-ms': 'GC-MS',
    'lc-ms': 'LC-MS',
    'uplc': 'UPLC',
    'uhplc': 'UHPLC',
    'hplc-uv': 'HPLC-UV',
    'hplc-dad': 'HPLC-DAD',
    'hplc-ms': 'HPLC-MS',
    'lc-ms/ms': 'LC-MS/MS',
    'gc-fid': 'GC-FID',
    'gc-tcd': 'GC-TCD',
    'hptlc': 'HPTLC',
    'sfc': 'SFC',

    # NMR
    'nmr': 'NMR',
    '1h nmr': '1H NMR',
    '1hnmr': '1H NMR',
    '1h-nmr': '1H NMR',
    '13c nmr': '13C NMR',
    '13cnmr': '13C NMR',
    '31p nmr': '31P NMR',
    '19f nmr': '19F NMR',
    '2d nmr': '2D NMR',

    # IR / UV / Vis
    'ir': 'IR',
    'ftir': 'FTIR',
    'nir': 'NIR',
    'atr-ftir': 'ATR-FTIR',
    'raman': 'Raman',
    'uv': 'UV',
    'uv-vis': 'UV-Vis',
    'vis': 'Vis',
    'fluorescence': 'Fluorescence',

    # Mass spectrometry
    'ms': 'MS',
    'maldi': 'MALDI',
    'maldi-tof': 'MALDI-TOF',
    'esi-ms': 'ESI-MS',
    'tof-ms': 'TOF-MS',

    # Elemental and metals
    'icp-ms': 'ICP-MS',
    'icp-oes': 'ICP-OES',
    'icp-aes': 'ICP-AES',
    'aas': 'AAS',
    'faas': 'FAAS',
    'gfaas': 'GFAAS',
    'xrf': 'XRF',
    'ed-xrf': 'ED-XRF',
    'wdxrf': 'WDXRF',

    # Structural
    'xrd': 'XRD',
    'xrpd': 'XRPD',
    'pxrd': 'PXRD',
    'scxrd': 'SCXRD',

    # Thermal
    'dsc': 'DSC',
    'tga': 'TGA',
    'dta': 'DTA',
    'tma': 'TMA',

    # Microscopy
    'sem': 'SEM',
    'tem': 'TEM',
    'optical microscopy': 'Optical Microscopy',

    # Microbiological and biological
    'lal': 'LAL',
    'membrane filtration': 'Membrane Filtration',
    'plate count': 'Plate Count',
    'mpn': 'MPN',
    'pcr': 'PCR',
    'qpcr': 'qPCR',
    'rt-pcr': 'RT-PCR',
    'elisa': 'ELISA',
    'gel clot': 'Gel Clot',
    'bioassay': 'Bioassay',
    'western blot': 'Western Blot',
    'sds-page': 'SDS-PAGE',
    'flow cytometry': 'Flow Cytometry',

    # Particle characterization
    'laser diffraction': 'Laser Diffraction',
    'dynamic light scattering': 'Dynamic Light Scattering',
    'dls': 'DLS',
    'bet': 'BET',

    # Other
    'lod': 'LOD',
    'karl fischer': 'Karl Fischer',
    'kf': 'Karl Fischer',
    'visual': 'Visual',
    'visual inspection': 'Visual Inspection',
    'organoleptic': 'Organoleptic',
    'titration': 'Titration',
    'potentiometric titration': 'Potentiometric Titration',
    'ph meter': 'pH Meter',
    'melting point apparatus': 'Melting Point Apparatus',
    'polarimeter': 'Polarimeter',
    'refractometer': 'Refractometer',
    'viscometer': 'Viscometer',
    'densitometer': 'Densitometer',
    'conductivity meter': 'Conductivity Meter',
}

# Most common method for an attribute, used only when enabled
DEFAULT_METHODS: Dict[str, str] = {
    'water': 'Karl Fischer',
    'water content': 'Karl Fischer',
    'moisture': 'Karl Fischer',
    'moisture content': 'Karl Fischer',
    'structure': '1H NMR',
    'identity': 'IR',
    'purity': 'HPLC',
    'assay': 'HPLC',
    'appearance': 'Visual',
    'color': 'Visual',
    'colour': 'Visual',
    'form': 'Visual',
    'solubility': 'Visual',
    'odor': 'Organoleptic',
    'odour': 'Organoleptic',
    'viscosity': 'Viscometer',
    'density': 'Densitometer',
    'specific gravity': 'Densitometer',
    'refractive index': 'Refractometer',
    'optical rotation': 'Polarimeter',
    'specific rotation': 'Polarimeter',
    'conductivity': 'Conductivity Meter',
    'ph': 'pH Meter',
    'related substances': 'HPLC',
    'impurities': 'HPLC',
    'residual solvents': 'GC',
    'heavy metals': 'ICP-MS',
    'elemental impurities': 'ICP-MS',
    'melting point': 'Melting Point Apparatus',
    'glass transition': 'DSC',
    'decomposition temperature': 'TGA',
    'particle size': 'Laser Diffraction',
    'surface area': 'BET',
    'polymorphic form': 'XRPD',
    'loss on drying': 'LOD',
    'endotoxin': 'LAL',
    'bioburden': 'Membrane Filtration',
    'sterility': 'Membrane Filtration',
}

# Candidate methods offered to the user for an attribute keyword
METHOD_SUGGESTIONS: Dict[str, List[str]] = {
    'purity': ['GC', 'HPLC', 'NMR', 'Titration'],
    'assay': ['HPLC', 'GC', 'Titration', 'UV-Vis'],
    'moisture': ['Karl Fischer', 'LOD', 'TGA'],
    'water': ['Karl Fischer', 'LOD', 'TGA'],
    'ph': ['pH Meter', 'pH Paper'],
    'appearance': ['Visual Inspection'],
    'color': ['Visual Inspection', 'Spectrophotometry'],
    'solubility': ['Visual Observation'],
    'melting point': ['Melting Point Apparatus', 'DSC'],
    'identity': ['IR', 'NMR', 'MS', 'HPLC Retention Time'],
    'structure': ['1H NMR', '13C NMR', 'IR', 'MS'],
    'residual solvents': ['GC', 'GC-MS'],
    'heavy metals': ['ICP-MS', 'ICP-OES', 'AAS'],
    'particle size': ['Laser Diffraction', 'SEM', 'Sieving'],
}

# Help-text examples; every entry parses without errors
EXAMPLE_SPECS = [
    'purity ≥99.9% by gc, ph 6.5-7.5, appearance: white powder',
    'water content is less than or equal to 50 ppm, melting point is 100-102°C',
    'purity of 99.8% by 1hnmr and assay 98.0-102.0% by hplc',
    'conforms to structure by 1hnmr, confirms identity by ir',
    'heavy metals ≤10 ppm by icp-ms, residual solvents ≤0.1% by gc, color: colorless',
]
