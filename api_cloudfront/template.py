#!/usr/bin/env python3
"""
Load the packaged CloudFront resources and merge them into a deployment template.
"""
import copy
import json
import os

import yaml

from .errors import FragmentLoadError, TemplateError

RESOURCES_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'resources.yml')


def load_resources(filename=RESOURCES_FILE):
    """
    Load a fresh copy of the base distribution + DNS resources.
    A missing or broken file is a packaging error, not a user error.
    """
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            resources = yaml.safe_load(f)
    except OSError as e:
        raise FragmentLoadError(f"Could not read resources template {filename}: {e}") from e
    except yaml.YAMLError as e:
        raise FragmentLoadError(f"Could not parse resources template {filename}: {e}") from e

    try:
        resources['Resources']['ApiDistribution']['Properties']['DistributionConfig']
        resources['Resources']['CloudFrontDns']['Properties']['RecordSets'][0]
    except (TypeError, KeyError, IndexError) as e:
        raise FragmentLoadError(f"Resources template {filename} is missing the distribution or DNS record") from e
    return resources


def merge_template(base, fragment):
    """
    Deep merge fragment into base (base is modified and returned).

    Nested mappings are merged key by key; scalars and lists from the fragment
    replace the base value. Keys only present in base are kept. The fragment
    itself is never modified or shared with base.
    """
    for key, value in fragment.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_template(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def read_template(path):
    """
    Read a compiled CloudFormation template (JSON or YAML).
    YAML short-form intrinsics (!Ref, !GetAtt) are not supported.
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            if path.endswith('.json'):
                return json.load(f)
            return yaml.safe_load(f)
        except (ValueError, yaml.YAMLError) as e:
            raise TemplateError(f"Could not parse template {path}: {e}") from e


def write_template(template, path):
    """Write the template back, keeping the format implied by the extension."""
    with open(path, 'w', encoding='utf-8') as f:
        if path.endswith('.json'):
            json.dump(template, f, indent=2)
            f.write('\n')
        else:
            yaml.dump(template, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
