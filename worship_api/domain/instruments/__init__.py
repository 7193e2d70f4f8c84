"""Instruments domain - Instrument catalogue"""
