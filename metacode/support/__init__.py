""" Small pieces the tokenizers and the compiler are built from. """
