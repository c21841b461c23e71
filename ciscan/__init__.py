"""Project scanning helpers, option trees and CI workflow configuration generation."""

__version__ = "2.3.1"