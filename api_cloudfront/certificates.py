#!/usr/bin/env python3
"""
AWS Certificate Manager (ACM) certificate resolution for the distribution.
"""
from botocore.exceptions import BotoCoreError, ClientError

from .errors import CertificateNotFoundError, CertificateServiceError

CERTIFICATE_STATUSES = ['PENDING_VALIDATION', 'ISSUED', 'INACTIVE']


def normalize_domain(domain_name):
    """*.example.com -> example.com"""
    if domain_name.startswith('*.'):
        return domain_name[2:]
    return domain_name


def select_certificate(certificates, host_name):
    """
    Pick the most specific certificate for host_name.

    A certificate is eligible when its domain (wildcard removed) is contained
    in host_name. The longest eligible domain wins; on equal length the first
    one listed is kept. ACM does not guarantee the listing order, so which of
    two equally long matches wins is not stable across calls.
    Returns the ARN or None.
    """
    cert_arn = None
    name_length = 0
    for certificate in certificates:
        name = normalize_domain(certificate.get('DomainName', ''))
        if name in host_name and len(name) > name_length:
            name_length = len(name)
            cert_arn = certificate['CertificateArn']
    return cert_arn


def list_certificates(acm_client):
    """
    List certificates in every usable status. One request, no retry.
    """
    try:
        response = acm_client.list_certificates(CertificateStatuses=CERTIFICATE_STATUSES)
    except (ClientError, BotoCoreError) as e:
        raise CertificateServiceError(f"Could not list certificates in Certificate Manager.\n{e}") from e
    return response.get('CertificateSummaryList', [])


def resolve_certificate_arn(acm_client, certificate, host_name):
    """
    Resolve the ACM certificate ARN for the distribution.

    Args:
        acm_client: boto3 ACM client (us-east-1 for CloudFront)
        certificate: Explicit certificate ARN from the configuration, or None
        host_name: Domain with its leftmost label removed

    Returns the explicit ARN unchanged when configured, otherwise the ARN of the
    most specific listed certificate covering host_name.
    """
    if certificate:
        print(f"Selected specific certificateArn {certificate}")
        return certificate

    # Blocks until ACM answers; the only network call of a preparation run
    certificates = list_certificates(acm_client)

    cert_arn = select_certificate(certificates, host_name)
    if cert_arn is None:
        raise CertificateNotFoundError(f"Could not find a certificate for {host_name}")

    print(f"The domain {host_name} resolved to the following certificateArn: {cert_arn}")
    return cert_arn
