"""Parser package for robots.txt text."""

from parser.robots import inspect, parse, tokenize

__all__ = ["inspect", "parse", "tokenize"]
