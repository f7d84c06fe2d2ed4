"""Embedded empirical distributions.

Frequencies were aggregated from anonymised PACS metadata counts; they
describe how often values occur, never any individual record.
"""

# code, frequency, series/study mean, series/study sd, images/series mean, images/series sd
MODALITY_STATS: list[tuple[str, float, float, float, float, float]] = [
    ("CR", 2513.0, 1.21, 0.52, 1.32, 0.64),
    ("CT", 1892.0, 2.87, 2.13, 109.6, 94.8),
    ("DX", 1487.0, 1.33, 0.61, 1.41, 0.72),
    ("MR", 1168.0, 6.54, 3.18, 27.9, 19.7),
    ("US", 804.0, 1.08, 0.31, 11.8, 9.2),
    ("MG", 612.0, 1.02, 0.18, 4.1, 1.2),
    ("XA", 297.0, 3.46, 2.51, 24.7, 29.9),
    ("RF", 211.0, 2.03, 1.24, 7.9, 6.3),
    ("NM", 188.0, 2.48, 1.37, 3.2, 2.1),
    ("PT", 96.0, 3.02, 1.54, 248.0, 121.0),
    ("OT", 54.0, 1.12, 0.41, 2.3, 1.8),
]

CT_IMAGE_TYPES: list[tuple[str, float]] = [
    ("ORIGINAL\\PRIMARY\\AXIAL", 7163.0),
    ("ORIGINAL\\PRIMARY\\LOCALIZER", 1534.0),
    ("DERIVED\\SECONDARY\\REFORMATTED", 611.0),
    ("DERIVED\\SECONDARY\\SCREEN SAVE", 392.0),
    ("DERIVED\\SECONDARY\\MPR", 300.0),
]

IMAGE_TYPES_BY_MODALITY: dict[str, list[tuple[str, float]]] = {
    "CT": CT_IMAGE_TYPES,
}

# modality -> tag keyword -> [(value, frequency)]
TAG_VALUES_BY_MODALITY: dict[str, dict[str, list[tuple[str, float]]]] = {
    "CT": {
        "StudyDescription": [
            ("CT Head", 2941.0),
            ("CT Chest", 1302.0),
            ("CT Abdomen and Pelvis", 1187.0),
            ("CT Chest Abdomen Pelvis", 904.0),
            ("CT Pulmonary Angiogram", 388.0),
            ("CT Cervical Spine", 263.0),
            ("CT Colonography", 71.0),
        ],
        "BodyPartExamined": [
            ("HEAD", 3120.0),
            ("CHEST", 2061.0),
            ("ABDOMEN", 1488.0),
            ("CSPINE", 270.0),
        ],
        "SeriesDescription": [
            ("Axial 5mm", 2210.0),
            ("Axial 1.25mm", 1470.0),
            ("Scout", 1120.0),
            ("Coronal MPR", 640.0),
            ("Dose Report", 212.0),
        ],
        "Manufacturer": [("GE MEDICAL SYSTEMS", 3301.0), ("SIEMENS", 2774.0)],
        "ManufacturerModelName": [
            ("LightSpeed VCT", 2114.0),
            ("Revolution CT", 1187.0),
            ("SOMATOM Definition AS", 2774.0),
        ],
        "SliceThickness": [("5", 2310.0), ("2.5", 904.0), ("1.25", 1490.0), ("0.625", 388.0)],
        "KVP": [("120", 4480.0), ("100", 1021.0), ("140", 388.0), ("80", 186.0)],
        "ContrastBolusAgent": [("OMNIPAQUE 300", 1830.0), ("VISIPAQUE 320", 412.0)],
    },
    "MR": {
        "StudyDescription": [
            ("MRI Head", 1612.0),
            ("MRI Lumbar Spine", 734.0),
            ("MRI Knee", 541.0),
            ("MRI Prostate", 188.0),
            ("MRI Liver", 176.0),
        ],
        "BodyPartExamined": [("BRAIN", 1650.0), ("LSPINE", 740.0), ("KNEE", 545.0), ("PELVIS", 190.0)],
        "SeriesDescription": [
            ("T1 SAG", 1610.0),
            ("T2 AX", 1588.0),
            ("FLAIR AX", 1204.0),
            ("DWI", 977.0),
            ("T2 COR", 702.0),
        ],
        "Manufacturer": [("SIEMENS", 2102.0), ("Philips Medical Systems", 1134.0)],
        "ManufacturerModelName": [("Avanto", 1207.0), ("Skyra", 895.0), ("Ingenia", 1134.0)],
        "SliceThickness": [("3", 1408.0), ("4", 982.0), ("5", 641.0)],
    },
    "CR": {
        "StudyDescription": [
            ("XR Chest", 5011.0),
            ("XR Hand", 611.0),
            ("XR Knee", 598.0),
            ("XR Hip", 442.0),
            ("XR Ankle", 403.0),
        ],
        "BodyPartExamined": [("CHEST", 5020.0), ("HAND", 611.0), ("KNEE", 598.0), ("HIP", 442.0)],
        "Manufacturer": [("Agfa", 3006.0), ("FUJIFILM Corporation", 1412.0)],
        "KVP": [("70", 2210.0), ("80", 1530.0), ("110", 1106.0)],
    },
    "DX": {
        "StudyDescription": [
            ("XR Chest", 3110.0),
            ("XR Lumbar Spine", 402.0),
            ("XR Wrist", 399.0),
            ("XR Foot", 377.0),
        ],
        "BodyPartExamined": [("CHEST", 3120.0), ("LSPINE", 402.0), ("WRIST", 399.0), ("FOOT", 377.0)],
        "Manufacturer": [("Carestream Health", 1822.0), ("Canon Inc.", 1040.0)],
        "KVP": [("75", 1810.0), ("85", 1120.0), ("120", 910.0)],
    },
    "US": {
        "StudyDescription": [
            ("US Abdomen", 1203.0),
            ("US Obstetric", 1112.0),
            ("US Pelvis", 604.0),
            ("US Thyroid", 211.0),
        ],
        "Manufacturer": [("GE Healthcare", 1288.0), ("Philips Medical Systems", 1004.0)],
    },
    "MG": {
        "StudyDescription": [
            ("MG Screening Bilateral", 2301.0),
            ("MG Diagnostic Bilateral", 606.0),
        ],
        "BodyPartExamined": [("BREAST", 2907.0)],
        "Manufacturer": [("HOLOGIC, Inc.", 2211.0), ("SIEMENS", 696.0)],
    },
    "XA": {
        "StudyDescription": [("Coronary Angiogram", 742.0), ("Peripheral Angiogram", 211.0)],
        "BodyPartExamined": [("HEART", 742.0), ("LEG", 211.0)],
    },
    "RF": {
        "StudyDescription": [("Barium Swallow", 302.0), ("Fluoroscopy Guidance", 288.0)],
    },
    "NM": {
        "StudyDescription": [("NM Bone Scan", 404.0), ("NM Myocardial Perfusion", 311.0)],
    },
    "PT": {
        "StudyDescription": [("PET-CT Whole Body FDG", 288.0)],
        "BodyPartExamined": [("WHOLEBODY", 288.0)],
    },
}

# prefix, digit count, frequency
ACCESSION_NUMBER_FORMATS: list[tuple[str, int, float]] = [
    ("RA", 8, 5120.0),
    ("SR", 8, 2410.0),
    ("NINW", 9, 701.0),
    ("", 10, 1450.0),
]

# Study start frequency for each hour of the day, 00:00 to 23:00
HOURLY_STUDY_FREQUENCY: list[float] = [
    41.0, 33.0, 28.0, 24.0, 22.0, 27.0, 58.0, 164.0,
    512.0, 896.0, 1003.0, 968.0, 781.0, 842.0, 951.0, 902.0,
    744.0, 433.0, 261.0, 190.0, 142.0, 111.0, 83.0, 57.0,
]
