"""Orders API"""
