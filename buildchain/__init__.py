"""buildchain -- build dependency graphs for image repositories.

Given the build configurations of a cluster, works out which image
repositories transitively trigger which builds and renders the result
as JSON, DOT, or a parenthesized tree.
"""

__version__ = "0.1.0"
