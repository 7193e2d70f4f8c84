"""Helpers shared across domains: schemas, validators and time utilities"""
