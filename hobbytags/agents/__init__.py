"""
Agent implementations for hobbytags.

Contains the modules a survey row passes through:
- Ingestion (CSV parsing, header validation)
- Text Normalization
- Keyword Extraction
- Area Classification
- Hobby Tagging (rule-based / canonical dictionary)
- Rating Field Mapping
- Record Assembly
- Aggregation
- Clustering (optional, embedding based)
"""
