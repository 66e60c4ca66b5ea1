"""
Clinical constants for Health Core.

These are published conversion factors and medically meaningful bounds that
rarely change. Separate from config.py which contains runtime/tunable
parameters.
"""

# === Body measurements ===
LBS_PER_KG = 2.20462
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12

# === Lab conversion factors (mg/dL per mmol/L unless noted) ===
CHOLESTEROL_FACTOR = 38.67      # LDL, HDL, total cholesterol
TRIGLYCERIDES_FACTOR = 88.57
APOB_FACTOR = 100               # mg/dL per g/L
CREATININE_FACTOR = 88.4        # µmol/L per mg/dL

# === HbA1c: NGSP % = slope × IFCC mmol/mol + intercept ===
HBA1C_NGSP_SLOPE = 0.09148
HBA1C_NGSP_INTERCEPT = 2.152

# === Demographics ===
MIN_BIRTH_YEAR = 1900
# Years with fewer digits are treated as still being typed.
BIRTH_YEAR_DIGITS = 4

# === Calculations ===
IBW_BASE_MALE_KG = 50.0
IBW_BASE_FEMALE_KG = 45.5
IBW_KG_PER_CM = 0.91
IBW_BASELINE_HEIGHT_CM = 152.4
IBW_MINIMUM_KG = 30.0
PROTEIN_G_PER_KG = 1.2
