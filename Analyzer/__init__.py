"""
Text Analyzer backend
"""
