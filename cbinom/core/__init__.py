from .cdf import pcbinom
from .density import dcbinom, log_dcbinom
from .quantile import qcbinom, rcbinom, invert
from .moments import FitResult, cbinom_mme, cbinomMME, raw_moments
from .empirical import EmpiricalCdfTable, QQPairs, empirical_cdf, qq_pairs
