"""Worship Set Manager API - scheduling, song selection and team assignments for worship services"""
