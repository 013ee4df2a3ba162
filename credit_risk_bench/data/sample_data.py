"""
Sample Data Generator

Generates synthetic credit card account data in the benchmark's input
schema, with a bad flag that depends on spend, utilisation and income.
"""

from pathlib import Path

import numpy as np
import pandas as pd


RANDOM_SEED = 42

SEX_VALUES = ["F", "M"]
EDUCATION_VALUES = ["high_school", "bachelor", "master", "doctorate"]
MARITAL_STATUS_VALUES = ["single", "married", "divorced", "widowed"]


def generate_credit_data(n_rows: int = 1000, seed: int = RANDOM_SEED) -> pd.DataFrame:
    """
    Generate a labelled credit dataset.

    Args:
        n_rows: Number of accounts
        seed: Random seed

    Returns:
        DataFrame with account_id, bad_flag and the predictor columns
    """
    rng = np.random.default_rng(seed)

    age = rng.integers(21, 75, n_rows)
    income = np.round(rng.lognormal(10.8, 0.45, n_rows), 2)
    credit_limit = np.round(np.clip(income * rng.uniform(0.1, 0.5, n_rows), 500, 60000), -2)
    pur_6 = rng.poisson(18, n_rows)
    avg_pur_amt_6 = np.round(rng.gamma(2.0, 60.0, n_rows), 2)
    amount_6 = np.round(pur_6 * avg_pur_amt_6, 2)
    avg_interval_pur_6 = np.round(180.0 / np.maximum(pur_6, 1) * rng.uniform(0.8, 1.2, n_rows), 2)

    sex = rng.choice(SEX_VALUES, n_rows)
    education = rng.choice(EDUCATION_VALUES, n_rows, p=[0.35, 0.40, 0.20, 0.05])
    marital_status = rng.choice(MARITAL_STATUS_VALUES, n_rows, p=[0.40, 0.45, 0.12, 0.03])

    # Risk rises with utilisation and falls with income and age
    utilisation = amount_6 / credit_limit
    logit = (
        -2.2
        + 1.4 * np.clip(utilisation, 0, 3)
        - 0.6 * (np.log(income) - 10.8)
        - 0.015 * (age - 45)
        + 0.3 * (education == "high_school")
        + rng.normal(0, 0.5, n_rows)
    )
    bad_flag = (rng.random(n_rows) < 1 / (1 + np.exp(-logit))).astype(int)

    return pd.DataFrame({
        "account_id": np.arange(1, n_rows + 1),
        "bad_flag": bad_flag,
        "amount_6": amount_6,
        "pur_6": pur_6,
        "avg_pur_amt_6": avg_pur_amt_6,
        "avg_interval_pur_6": avg_interval_pur_6,
        "credit_limit": credit_limit,
        "age": age,
        "income": income,
        "sex": sex,
        "education": education,
        "marital_status": marital_status,
    })


def write_credit_data(
    path: str,
    n_rows: int = 1000,
    seed: int = RANDOM_SEED,
    delimiter: str = ",",
) -> pd.DataFrame:
    """Generate a dataset and write it as a delimited file."""
    df = generate_credit_data(n_rows=n_rows, seed=seed)
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False, sep=delimiter)
    return df
