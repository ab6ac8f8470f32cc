"""Business registration intake: validation, derived fields, fee estimate and submission"""

__version__ = "0.1.0"
