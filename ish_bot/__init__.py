"""
ISH Bot - multilingual public health chat assistant
"""

__version__ = "1.0.0"
