"""Addresses API"""
