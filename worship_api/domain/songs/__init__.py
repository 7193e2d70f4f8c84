"""Songs domain - Song library"""
