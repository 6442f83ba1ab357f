#!/usr/bin/env python3
"""
CloudFront distribution and Route53 record for API Gateway deployments.
"""
from .distribution import prepare_resources
from .template import load_resources, merge_template

__all__ = ['prepare_resources', 'load_resources', 'merge_template']
