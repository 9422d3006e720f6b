"""
Causal relation extraction — data preparation.

This package contains:
- schema detection / robust loading of hypothesis tables
- entity anonymization (node1 / node2 placeholders) and text normalization
- hypothesis trimming around the entity markers
- bag-of-words n-gram document-term matrices
- train/test splitting and the end-to-end dataset builder
"""
