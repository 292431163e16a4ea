"""
Core geometry, vector algebra and numerical calculus.

This package contains the computational building blocks of the math
visualization tool. It is independent of any rendering surface: shapes
emit abstract draw descriptors that an external renderer consumes.
"""
