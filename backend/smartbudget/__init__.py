"""
SmartBudget backend: transaction tracking with rule-based categorization.
"""
