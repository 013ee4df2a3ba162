"""
Models Module

Provides model formulas, training wrappers and the vote ensemble.
"""

from credit_risk_bench.models.formula import Formula
from credit_risk_bench.models.base_model import BaseModel
from credit_risk_bench.models.logistic_model import LogisticRegressionModel
from credit_risk_bench.models.random_forest_model import RandomForestModel
from credit_risk_bench.models.gradient_boosting_model import GradientBoostingModel
from credit_risk_bench.models.voting_ensemble import VotingEnsemble
from credit_risk_bench.models.model_factory import ModelFactory, load_model

__all__ = [
    "Formula",
    "BaseModel",
    "LogisticRegressionModel",
    "RandomForestModel",
    "GradientBoostingModel",
    "VotingEnsemble",
    "ModelFactory",
    "load_model",
]
