"""File format readers and writers.

- `simple`: edge-list format, read and write, optional gzip.
- `graphml`: GraphML, read only, all graphs in a document.
- `gml`: GML, read only, first graph in a document.
"""
