"""
Business services for purchase order item reads.
"""
