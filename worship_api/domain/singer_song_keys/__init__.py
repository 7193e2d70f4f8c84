"""Singer song keys domain - Keys singers have used for each song"""
