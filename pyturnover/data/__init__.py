"""
Employee turnover data.

Public API:
    load_turnover(path) -> DataFrame
    prepare_turnover(df) -> DataFrame
    CovariateEncoder
    stratified_split(df) -> Partition
"""

from pyturnover.data._schema import CATEGORICAL, COVARIATES, DURATION, EVENT, NUMERIC
from pyturnover.data.encoding import CovariateEncoder
from pyturnover.data.loader import load_turnover, prepare_turnover
from pyturnover.data.split import Partition, stratified_split

__all__ = [
    "load_turnover",
    "prepare_turnover",
    "CovariateEncoder",
    "Partition",
    "stratified_split",
    "DURATION",
    "EVENT",
    "CATEGORICAL",
    "NUMERIC",
    "COVARIATES",
]
