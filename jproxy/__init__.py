"""
Configuration layer of the Jenkins proxy service.

Settings are resolved from compiled-in defaults, an optional YAML file and
the process environment, in increasing order of precedence.
"""

__version__ = "0.1.0"
