"""Panel user management API"""
