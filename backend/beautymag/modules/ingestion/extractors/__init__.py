"""Brief extractors, one per upload format.

  TabularExtractor   — .csv / .tsv with a header row, one record per row
  DocumentExtractor  — .docx free text, brand mentions or a single excerpt
  ExtractorRegistry  — format hint (extension) -> extractor
"""
