"""Services domain - Dated worship services and their assignments"""
