"""gclone command line interface"""
