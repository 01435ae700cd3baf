"""hamcycles - Count crossing-free Hamiltonian cycles over planar point sets.

hamcycles enumerates simple (non-self-crossing) Hamiltonian cycles through a
finite point set in general position. All geometry is done with exact rational
arithmetic, so degenerate and near-degenerate configurations are never
misclassified.

Example:
    $ hamcycles points.txt

This prints the number of simple Hamiltonian cycles through the points listed
in points.txt, counting each cycle once per traversal direction.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
