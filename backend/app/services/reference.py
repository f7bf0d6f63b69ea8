# backend/app/services/reference.py
# Static district coordinates for every supported state. The fallback generator
# produces one record per district listed here and the locator scans the same table.

SUPPORTED_STATES = [
    "GUJARAT",
    "MAHARASHTRA",
    "RAJASTHAN",
    "UTTAR PRADESH",
    "MADHYA PRADESH",
    "BIHAR",
]

MAHARASHTRA_DISTRICTS = {
    "MUMBAI": (19.0760, 72.8777),
    "PUNE": (18.5204, 73.8567),
    "NAGPUR": (21.1458, 79.0882),
    "THANE": (19.2183, 72.9781),
    "NASHIK": (19.9975, 73.7898),
    "AURANGABAD": (19.8762, 75.3433),
    "SOLAPUR": (17.6599, 75.9064),
    "AMRAVATI": (20.9374, 77.7796),
    "KOLHAPUR": (16.7050, 74.2433),
    "SANGLI": (16.8524, 74.5815),
    "JALGAON": (21.0077, 75.5626),
    "AHMEDNAGAR": (19.0948, 74.7480),
    "LATUR": (18.4088, 76.5604),
    "DHULE": (20.9042, 74.7749),
    "RATNAGIRI": (16.9902, 73.3120),
    "SATARA": (17.6805, 74.0183),
    "NANDED": (19.1383, 77.3210),
    "BEED": (18.9894, 75.7607),
    "JALNA": (19.8347, 75.8800),
    "OSMANABAD": (18.1770, 76.0398),
}

GUJARAT_DISTRICTS = {
    "AHMEDABAD": (23.0225, 72.5714),
    "SURAT": (21.1702, 72.8311),
    "VADODARA": (22.3072, 73.1812),
    "RAJKOT": (22.3039, 70.8022),
    "GANDHINAGAR": (23.2156, 72.6369),
    "BHAVNAGAR": (21.7645, 72.1519),
    "JAMNAGAR": (22.4707, 70.0577),
    "JUNAGADH": (21.5222, 70.4579),
    "BHARUCH": (21.7051, 72.9959),
    "NAVSARI": (20.9467, 72.9528),
    "SURENDRANAGAR": (22.7236, 71.6554),
    "MEHSANA": (23.6000, 72.3910),
    "PORBANDAR": (21.6417, 69.6099),
    "AMRELI": (21.6264, 71.2223),
    "NARMADA": (21.8700, 73.4000),
    "KUTCH": (23.0739, 69.8597),
    "PANCHMAHAL": (22.7500, 73.5000),
    "BANASKANTHA": (24.2360, 72.4150),
    "ANAND": (22.5520, 72.9510),
}

RAJASTHAN_DISTRICTS = {
    "JAIPUR": (26.9124, 75.7873),
    "JODHPUR": (26.2389, 73.0243),
    "UDAIPUR": (24.5854, 73.7125),
    "KOTA": (25.2138, 75.8648),
    "AJMER": (26.4499, 74.6399),
    "BIKANER": (28.0229, 73.3119),
    "ALWAR": (27.5530, 76.6346),
    "BHILWARA": (25.3407, 74.6313),
    "BARMER": (25.7521, 71.3967),
    "SIKAR": (27.6094, 75.1399),
}

UTTAR_PRADESH_DISTRICTS = {
    "LUCKNOW": (26.8467, 80.9462),
    "KANPUR NAGAR": (26.4499, 80.3319),
    "AGRA": (27.1767, 78.0081),
    "VARANASI": (25.3176, 82.9739),
    "PRAYAGRAJ": (25.4358, 81.8463),
    "GORAKHPUR": (26.7606, 83.3732),
    "MEERUT": (28.9845, 77.7064),
    "BAREILLY": (28.3670, 79.4304),
    "ALIGARH": (27.8974, 78.0880),
    "JHANSI": (25.4484, 78.5685),
}

MADHYA_PRADESH_DISTRICTS = {
    "BHOPAL": (23.2599, 77.4126),
    "INDORE": (22.7196, 75.8577),
    "JABALPUR": (23.1815, 79.9864),
    "GWALIOR": (26.2183, 78.1828),
    "UJJAIN": (23.1765, 75.7885),
    "SAGAR": (23.8388, 78.7378),
    "REWA": (24.5362, 81.3037),
    "SATNA": (24.6005, 80.8322),
    "CHHINDWARA": (22.0574, 78.9382),
    "KHARGONE": (21.8234, 75.6102),
}

BIHAR_DISTRICTS = {
    "PATNA": (25.5941, 85.1376),
    "GAYA": (24.7914, 85.0002),
    "BHAGALPUR": (25.2425, 86.9842),
    "MUZAFFARPUR": (26.1209, 85.3647),
    "DARBHANGA": (26.1542, 85.8918),
    "PURNIA": (25.7771, 87.4753),
    "NALANDA": (25.1363, 85.4449),
    "SARAN": (25.7777, 84.7275),
    "BEGUSARAI": (25.4182, 86.1272),
    "SITAMARHI": (26.5952, 85.4808),
}

DISTRICTS_BY_STATE = {
    "GUJARAT": GUJARAT_DISTRICTS,
    "MAHARASHTRA": MAHARASHTRA_DISTRICTS,
    "RAJASTHAN": RAJASTHAN_DISTRICTS,
    "UTTAR PRADESH": UTTAR_PRADESH_DISTRICTS,
    "MADHYA PRADESH": MADHYA_PRADESH_DISTRICTS,
    "BIHAR": BIHAR_DISTRICTS,
}


def normalize_name(name):
    return (name or "").strip().upper()


def districts_for(state_name):
    """Known district names of a state in table order; [] for unsupported states."""
    return list(DISTRICTS_BY_STATE.get(normalize_name(state_name), {}))


def district_locations(table=None):
    """Flatten a {state: {district: (lat, lng)}} table into location dicts."""
    table = DISTRICTS_BY_STATE if table is None else table
    return [
        {"name": name, "state": state, "latitude": lat, "longitude": lng}
        for state, districts in table.items()
        for name, (lat, lng) in districts.items()
    ]
