#!/usr/bin/env python3
"""
Prepare the CloudFront distribution and DNS record from the apiCloudFront settings.

Each stage takes the resources document and the resolved settings and returns
the resources document. Stages run in PIPELINE order; the certificate stage is
always last because it needs the host name written by prepare_domain and is
the only one that calls AWS.
"""
import copy

from .certificates import resolve_certificate_arn
from .config import Names


def _distribution_config(resources):
    return resources['Resources']['ApiDistribution']['Properties']['DistributionConfig']


def _dns_config(resources):
    return resources['Resources']['CloudFrontDns']['Properties']


def _forwarded_values(resources):
    return _distribution_config(resources)['DefaultCacheBehavior']['ForwardedValues']


def prepare_domain(resources, settings):
    distribution_config = _distribution_config(resources)
    dns_config = _dns_config(resources)
    domains = settings['domains']

    distribution_config['Aliases'] = list(domains)
    dns_config['HostedZoneName'] = f"{settings['host_name']}."
    dns_config['RecordSets'][0]['Name'] = domains[0]
    return resources


def prepare_logging(resources, settings):
    distribution_config = _distribution_config(resources)
    if settings['logging_bucket']:
        distribution_config['Logging']['Bucket'] = settings['logging_bucket']
        distribution_config['Logging']['Prefix'] = settings['logging_prefix']
    else:
        distribution_config.pop('Logging', None)
    return resources


def prepare_price_class(resources, settings):
    _distribution_config(resources)['PriceClass'] = settings['price_class']
    return resources


def prepare_origins(resources, settings):
    _distribution_config(resources)['Origins'][0]['OriginPath'] = f"/{settings['stage']}"
    return resources


def prepare_cookies(resources, settings):
    cookies = settings['cookies']
    forwarded = _forwarded_values(resources)['Cookies']
    if isinstance(cookies, Names):
        forwarded['Forward'] = 'whitelist'
        forwarded['WhitelistedNames'] = list(cookies.items)
    else:
        forwarded['Forward'] = cookies.value
    return resources


def prepare_headers(resources, settings):
    headers = settings['headers']
    if isinstance(headers, Names):
        _forwarded_values(resources)['Headers'] = list(headers.items)
    else:
        _forwarded_values(resources)['Headers'] = [] if headers.value == 'none' else ['*']
    return resources


def prepare_query_string(resources, settings):
    query_string = settings['querystring']
    forwarded = _forwarded_values(resources)
    if isinstance(query_string, Names):
        forwarded['QueryString'] = True
        forwarded['QueryStringCacheKeys'] = list(query_string.items)
    else:
        forwarded['QueryString'] = query_string.value == 'all'
    return resources


def prepare_comment(resources, settings):
    _distribution_config(resources)['Comment'] = f"Serverless - {settings['api_name']}"
    return resources


def prepare_waf(resources, settings):
    distribution_config = _distribution_config(resources)
    if settings['waf']:
        distribution_config['WebACLId'] = settings['waf']
    else:
        distribution_config.pop('WebACLId', None)
    return resources


def prepare_compress(resources, settings):
    _distribution_config(resources)['DefaultCacheBehavior']['Compress'] = settings['compress']
    return resources


def prepare_minimum_protocol_version(resources, settings):
    if settings['minimum_protocol_version']:
        viewer_certificate = _distribution_config(resources)['ViewerCertificate']
        viewer_certificate['MinimumProtocolVersion'] = settings['minimum_protocol_version']
    return resources


def prepare_ttl(resources, settings):
    cache_behavior = _distribution_config(resources)['DefaultCacheBehavior']
    cache_behavior['DefaultTTL'] = settings['default_ttl']
    cache_behavior['MinTTL'] = settings['min_ttl']
    return resources


def prepare_certificate(resources, settings, acm_client):
    distribution_config = _distribution_config(resources)
    cert_arn = resolve_certificate_arn(acm_client, settings['certificate'], settings['host_name'])
    if cert_arn:
        distribution_config['ViewerCertificate']['AcmCertificateArn'] = cert_arn
    else:
        distribution_config.pop('ViewerCertificate', None)
    return resources


PIPELINE = [
    prepare_domain,
    prepare_logging,
    prepare_price_class,
    prepare_origins,
    prepare_cookies,
    prepare_headers,
    prepare_query_string,
    prepare_comment,
    prepare_waf,
    prepare_compress,
    prepare_minimum_protocol_version,
    prepare_ttl,
]


def prepare_resources(resources, settings, acm_client):
    """
    Run every stage on a copy of resources and return the prepared copy.

    Any stage error propagates unchanged, so a half-prepared document never
    reaches the caller.
    """
    prepared = copy.deepcopy(resources)
    for stage in PIPELINE:
        prepared = stage(prepared, settings)
    return prepare_certificate(prepared, settings, acm_client)
