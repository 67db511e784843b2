import json
from pathlib import Path

# Parameter order matches the argument order of model.conductance.
PARAM_NAMES = ("windspeed", "height", "k_d", "k_o")

DEFAULT_N_SAMPLES = 100

DEFAULT_PARAMS = {
    "windspeed": {"dist": "normal", "mean": 250.0, "sd": 30.0, "unit": "cm/s"},
    "height": {"dist": "uniform", "min": 9.5, "max": 10.5, "factor": 100.0, "unit": "cm"},
    "k_d": {"dist": "normal", "mean": 0.7, "sd": 0.007},
    "k_o": {"dist": "normal", "mean": 0.1, "sd": 0.001},
}


def ensure_outdir(path):
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def write_params_template(path="parameters_template.json", example=None):
    if example is None:
        example = DEFAULT_PARAMS
    ensure_outdir(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(example, f, indent=2)
    print(f"Wrote parameter template to: {path}")
