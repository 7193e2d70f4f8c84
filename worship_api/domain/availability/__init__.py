"""Availability domain - Date ranges when team members are unavailable"""
