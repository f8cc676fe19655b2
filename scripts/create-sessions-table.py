#!/usr/bin/env python3
"""
Create the DynamoDB sessions table and enable TTL on its expireAt attribute.

Usage:
    python create-sessions-table.py --table sessions --region us-west-2

Against DynamoDB Local:
    python create-sessions-table.py --table sessions --endpoint-url http://localhost:8000

Requirements:
    pip install boto3

TTL deletion is lazy: DynamoDB may keep expired items for up to a few days,
so readers must still check expiry_date themselves.
"""

import argparse
import sys

import boto3

KEY_ATTRIBUTE = 'session_id'
TTL_ATTRIBUTE = 'expireAt'


def create_sessions_table(table_name: str, region: str = 'us-west-2', endpoint_url: str = ''):
    """Create the table (if missing) and turn on TTL."""
    client = boto3.client('dynamodb', region_name=region, endpoint_url=endpoint_url or None)

    print(f"Table: {table_name}")
    print(f"Region: {region}")
    if endpoint_url:
        print(f"Endpoint: {endpoint_url}")
    print()

    # Step 1: Create the table
    print("Step 1: Creating table...")
    try:
        client.create_table(
            TableName=table_name,
            KeySchema=[{'AttributeName': KEY_ATTRIBUTE, 'KeyType': 'HASH'}],
            AttributeDefinitions=[{'AttributeName': KEY_ATTRIBUTE, 'AttributeType': 'S'}],
            BillingMode='PAY_PER_REQUEST',
        )
        client.get_waiter('table_exists').wait(TableName=table_name)
        print(f"  ✓ Table {table_name} created")
    except client.exceptions.ResourceInUseException:
        print(f"  ✓ Table {table_name} already exists")
    except Exception as e:
        print(f"  ✗ Unexpected error: {e}")
        return False

    # Step 2: Enable TTL
    print(f"Step 2: Enabling TTL on {TTL_ATTRIBUTE}...")
    try:
        current = client.describe_time_to_live(TableName=table_name)
        status = current.get('TimeToLiveDescription', {})
        if (
            status.get('AttributeName') == TTL_ATTRIBUTE
            and status.get('TimeToLiveStatus') in ('ENABLED', 'ENABLING')
        ):
            print("  ✓ TTL already enabled")
        else:
            client.update_time_to_live(
                TableName=table_name,
                TimeToLiveSpecification={'Enabled': True, 'AttributeName': TTL_ATTRIBUTE},
            )
            print(f"  ✓ TTL enabled on {TTL_ATTRIBUTE}")
    except Exception as e:
        print(f"  ✗ Failed: {e}")
        return False

    print()
    print("Done.")
    return True


def main():
    parser = argparse.ArgumentParser(description='Create the DynamoDB sessions table')
    parser.add_argument('--table', default='sessions', help='Table name (default: sessions)')
    parser.add_argument('--region', default='us-west-2', help='AWS region (default: us-west-2)')
    parser.add_argument('--endpoint-url', default='', help='Custom endpoint, e.g. DynamoDB Local')
    args = parser.parse_args()

    ok = create_sessions_table(args.table, args.region, args.endpoint_url)
    sys.exit(0 if ok else 1)


if __name__ == '__main__':
    main()
