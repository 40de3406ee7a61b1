"""Core services: configuration, fonts, rendering and scheduling"""
