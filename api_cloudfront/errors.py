#!/usr/bin/env python3
"""
Errors raised while preparing the CloudFront resources.
"""


class ApiCloudFrontError(Exception):
    """Base error. Every subclass aborts the whole preparation run."""


class ConfigurationError(ApiCloudFrontError):
    """Missing or invalid user configuration."""


class FragmentLoadError(ApiCloudFrontError):
    """Packaged resources template is missing or cannot be parsed."""


class CertificateServiceError(ApiCloudFrontError):
    """Listing certificates in Certificate Manager failed."""


class CertificateNotFoundError(ApiCloudFrontError):
    """No certificate covers the requested host name."""


class DnsUpsertError(ApiCloudFrontError):
    """Route53 rejected the record change."""


class TemplateError(ApiCloudFrontError):
    """Compiled deployment template cannot be parsed."""
