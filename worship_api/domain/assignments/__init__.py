"""Assignments domain - Musicians invited to play an instrument in a worship set"""
