""" The template language: tokenizer and interpreter. """
