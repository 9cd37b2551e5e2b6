"""Core application infrastructure: settings, database, security, errors"""
