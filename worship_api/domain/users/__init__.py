"""Users domain - Accounts, authentication and password reset"""
