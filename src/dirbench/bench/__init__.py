"""Benchmarking subsystem for dirbench.

Registers named candidate operations, times repeated sequential
invocations of each one, and summarizes and ranks the results.
"""
