"""
BIM Inner Join.

Streams several position-sorted PLINK .bim files in lockstep and reports the
variants shared by all of them, checking that their alleles agree.
"""

__version__ = "1.0.0"
__author__ = "Data Tecnica International"
