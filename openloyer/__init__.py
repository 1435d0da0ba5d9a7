"""OpenLoyer - rent management back office: payment matching engine."""

__version__ = "0.3.0"
