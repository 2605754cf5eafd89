"""
Size parsing and tree walking for sizecmp.

This package holds the two engines behind size_cmp: the size expression
parser and the depth-first tree filter.
"""
