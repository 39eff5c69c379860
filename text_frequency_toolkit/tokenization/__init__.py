"""Tokenization package for the Text Frequency Toolkit."""

from .tokenizer import Tokenizer, TokenRecord

__all__ = ['Tokenizer', 'TokenRecord']
