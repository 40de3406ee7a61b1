"""Presentation layer: colors, layout and display surfaces"""
