from .distribution import Distribution
from .continuous_binomial import ContinuousBinomial
