"""Residence permit card generator.

Turns a spreadsheet of person records into permit cards and enriches each
card with a generated passport photo from an external image service.
"""

__version__ = "0.1.0"
