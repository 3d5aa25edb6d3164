from cbinom.core import (
    dcbinom,
    log_dcbinom,
    pcbinom,
    qcbinom,
    rcbinom,
    invert,
    cbinom_mme,
    cbinomMME,
    raw_moments,
    FitResult,
    empirical_cdf,
    qq_pairs,
    EmpiricalCdfTable,
    QQPairs,
)
from cbinom.distributions import Distribution, ContinuousBinomial
from cbinom.config import (
    NumericalSettings,
    QuadratureSettings,
    QuantileSettings,
    FitSettings,
    DEFAULT_SETTINGS,
)
from cbinom.exceptions import CBinomError, InvalidArgument, DidNotConverge

__version__ = "0.1.0"
