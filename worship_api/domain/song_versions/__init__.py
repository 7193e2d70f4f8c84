"""Song versions domain - Arrangements of a song"""
