#!/usr/bin/env python3
"""
Configuration loading and lookup for the apiCloudFront settings.
"""
import os
from collections import namedtuple

import yaml

from .errors import ConfigurationError

CONFIG_NAMESPACE = 'custom.apiCloudFront'

# Options that may be a single string or a list of names
Scalar = namedtuple('Scalar', ['value'])
Names = namedtuple('Names', ['items'])


def load_config(config_file):
    """
    Load the project configuration (serverless.yml style) from a YAML file.
    """
    if not os.path.exists(config_file):
        raise ConfigurationError(f"Config file not found: {config_file}")
    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse config file {config_file}: {e}") from e

    if not config:
        raise ConfigurationError(f"Config file is empty: {config_file}")
    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_file}")
    return config


def _split_path(path):
    if not isinstance(path, str) or '' in path.split('.'):
        raise ValueError(f"Invalid config path: {path!r}")
    return path.split('.')


def _lookup(tree, path, default):
    value = tree
    for key in _split_path(path):
        if not isinstance(value, dict) or key not in value:
            return default
        value = value[key]
    return value


def get_config(config, field, default=None):
    """
    Read custom.apiCloudFront.<field> from the configuration.
    Returns default when any segment of the path is absent.
    """
    _split_path(field)
    return _lookup(config, f"{CONFIG_NAMESPACE}.{field}", default)


def read_forward(config, field, default):
    """Read a string-or-list option as Names(list) or Scalar(value)."""
    value = get_config(config, field, default)
    if isinstance(value, list):
        return Names(list(value))
    return Scalar(value)


def api_gateway_name(config, stage):
    """
    Name of the generated REST API: provider.apiName, or '<stage>-<service>'.
    """
    name = _lookup(config, 'provider.apiName', None)
    if name:
        return name
    return f"{stage}-{service_name(config)}"


def service_name(config):
    service = config.get('service')
    # service may be given in its long form: {name: ...}
    if isinstance(service, dict):
        service = service.get('name')
    if not service:
        raise ConfigurationError("service must be set in the config file")
    return service


def derive_host_name(domain):
    """
    Strip the leftmost label: api.example.com -> example.com.
    A domain without a dot is returned unchanged.
    """
    return domain.split('.', 1)[-1]


def read_domains(config):
    full_domain_name = get_config(config, 'fullDomainName', None)
    if not full_domain_name:
        raise ConfigurationError("fullDomainName must be provided as a parameter")

    if isinstance(full_domain_name, str):
        return [full_domain_name]
    if isinstance(full_domain_name, list) and all(isinstance(d, str) and d for d in full_domain_name):
        return list(full_domain_name)
    raise ConfigurationError("fullDomainName must be a domain name or a list of domain names")


def read_settings(config, stage, api_name):
    """
    Resolve every apiCloudFront option once, with its default.

    Args:
        config: Parsed project configuration
        stage: Deployment stage (from the command line, not the config file)
        api_name: Generated API Gateway name used in the distribution comment

    Returns:
        Dict consumed by the distribution stages.
    """
    domains = read_domains(config)

    return {
        'domains': domains,
        'host_name': derive_host_name(domains[0]),
        'stage': stage,
        'api_name': api_name,
        'logging_bucket': get_config(config, 'logging.bucket', None),
        'logging_prefix': get_config(config, 'logging.prefix', ''),
        'price_class': get_config(config, 'priceClass', 'PriceClass_100'),
        'cookies': read_forward(config, 'cookies', 'all'),
        'headers': read_forward(config, 'headers', 'none'),
        'querystring': read_forward(config, 'querystring', 'all'),
        'certificate': get_config(config, 'certificate', None),
        'waf': get_config(config, 'waf', None),
        'compress': get_config(config, 'compress', False) is True,
        'minimum_protocol_version': get_config(config, 'minimumProtocolVersion', None),
        'default_ttl': get_config(config, 'defaultTTL', '0'),
        'min_ttl': get_config(config, 'minTTL', '0'),
    }
