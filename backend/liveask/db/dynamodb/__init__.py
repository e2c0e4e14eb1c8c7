"""Shared DynamoDB utilities.

This package centralizes:
- boto3 client configuration
- mapping of botocore failures onto typed store errors
- table bootstrap (ensure-exists / create)

"""
