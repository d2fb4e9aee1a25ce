""" The outer document: tokenizer, structural validation, and the compiler driver. """
