"""Translate sugared set-theory formulas into primitive first-order logic."""

from setsugar.config.settings import TransformConfig
from setsugar.pipeline import desugar, run, translate

__all__ = ["TransformConfig", "desugar", "run", "translate"]
