"""Embedded FIGlet fonts (time.flf, date.flf)"""
