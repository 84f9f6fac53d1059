from smart_learner.consts import VERSION

__version__ = VERSION
