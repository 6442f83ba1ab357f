#!/usr/bin/env python3
"""
Post-deployment summary: the distribution domain and the aliases pointing at it.
"""

DISTRIBUTION_OUTPUT_KEY = 'ApiDistribution'


def describe_stack_outputs(cloudformation_client, stack_name):
    response = cloudformation_client.describe_stacks(StackName=stack_name)
    stacks = response.get('Stacks', [])
    if not stacks:
        return []
    return stacks[0].get('Outputs', [])


def find_distribution_domain(outputs):
    for output in outputs:
        if output.get('OutputKey') == DISTRIBUTION_OUTPUT_KEY:
            return output.get('OutputValue') or None
    return None


def build_summary(outputs, full_domain_name):
    """
    Returns {'distribution_domain': ..., 'aliases': [...]} or None when the
    stack has no distribution output yet.
    """
    distribution_domain = find_distribution_domain(outputs)
    if not distribution_domain:
        return None

    aliases = full_domain_name if isinstance(full_domain_name, list) else [full_domain_name]
    return {
        'distribution_domain': distribution_domain,
        'aliases': [alias for alias in aliases if alias],
    }
