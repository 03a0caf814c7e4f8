"""Graph primitives.

Graphs are NetworkX ``Graph``/``DiGraph`` objects over vertices ``1..N``;
`facade` holds the construction and inspection helpers used by the readers.
"""
