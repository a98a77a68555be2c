"""
Design DNA Services

Color pipeline, typography candidates, taste profiles and style guide evidence.
"""
