"""
IMP Operator Domains

Operator registry plus the core integer arithmetic/comparison domain.
"""
