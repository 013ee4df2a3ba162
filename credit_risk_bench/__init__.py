"""
Credit Risk Model Benchmark

Trains and compares credit default classifiers (Logistic Regression,
Random Forest, XGBoost variants and a vote ensemble) on a tabular credit
dataset, and persists the selected model for later scoring.
"""

__version__ = "1.0.0"
__author__ = "Credit Scoring Team"
