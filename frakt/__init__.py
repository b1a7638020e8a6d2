"""Fractal rendering with a TCP server handing out tasks and workers computing them."""

__version__ = "0.1.0"