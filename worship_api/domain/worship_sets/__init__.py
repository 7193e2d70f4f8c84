"""Worship sets domain - Song sets prepared for a service"""
