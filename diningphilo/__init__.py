"""Threaded simulation of the dining philosophers problem with a watching waiter."""

__version__ = "0.1.0"