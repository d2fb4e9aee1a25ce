"""
metacode: expand table-driven template macros embedded in the comments of a source file.
"""
