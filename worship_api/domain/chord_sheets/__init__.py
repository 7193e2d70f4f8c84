"""Chord sheets domain - Chord charts per song version, uploads and transposition"""
