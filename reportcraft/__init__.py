"""
ReportCraft - report outline designer for humanities and social-science
students.
"""

__version__ = "1.0.0"
