#!/usr/bin/env python3
"""
Route53 alias records pointing the configured domains at the distribution.
"""
from botocore.exceptions import BotoCoreError, ClientError

from .errors import DnsUpsertError

# Hosted zone id shared by every CloudFront distribution
CLOUDFRONT_HOSTED_ZONE_ID = 'Z2FDTNDATAQYW2'


def find_hosted_zone_id(route53_client, host_name):
    """
    Find the hosted zone named exactly host_name.
    Returns the hosted zone ID, or None if there is no such zone.
    """
    zone_name = host_name.rstrip('.')
    paginator = route53_client.get_paginator('list_hosted_zones')
    for page in paginator.paginate():
        for zone in page['HostedZones']:
            if zone['Name'].rstrip('.') == zone_name:
                return zone['Id']
    return None


def upsert_resource_record_set(route53_client, hosted_zone_id, record_name, dns_name, target_hosted_zone_id):
    """
    Create or replace an A alias record: record_name -> dns_name.
    """
    change_batch = {
        'Changes': [
            {
                'Action': 'UPSERT',
                'ResourceRecordSet': {
                    'Name': record_name,
                    'Type': 'A',
                    'AliasTarget': {
                        'DNSName': dns_name,
                        'EvaluateTargetHealth': False,
                        'HostedZoneId': target_hosted_zone_id,
                    },
                },
            }
        ],
        'Comment': 'Record created by api-cloudfront',
    }
    try:
        return route53_client.change_resource_record_sets(
            HostedZoneId=hosted_zone_id,
            ChangeBatch=change_batch
        )
    except (ClientError, BotoCoreError) as e:
        raise DnsUpsertError(f"Could not upsert A record {record_name} -> {dns_name}: {e}") from e


def upsert_alias_records(route53_client, domains, host_name, dns_name, target_hosted_zone_id=CLOUDFRONT_HOSTED_ZONE_ID):
    """
    Upsert one alias record per domain in the hosted zone named host_name.

    Returns the hosted zone ID used, or None when no hosted zone exists for
    host_name (nothing is changed in that case). The first failing upsert
    stops the run.
    """
    hosted_zone_id = find_hosted_zone_id(route53_client, host_name)
    if not hosted_zone_id:
        return None

    for domain in domains:
        upsert_resource_record_set(route53_client, hosted_zone_id, domain, dns_name, target_hosted_zone_id)
        print(f"Upserted A record: {domain} -> {dns_name}")
    return hosted_zone_id
