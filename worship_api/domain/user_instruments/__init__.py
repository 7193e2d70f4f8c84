"""User instruments domain - Instruments each team member plays"""
