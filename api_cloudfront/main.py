#!/usr/bin/env python3
"""
CLI entry point: add the CloudFront distribution to a compiled CloudFormation
template, print the deployed distribution, or upsert the DNS alias records.
"""
import argparse
import os
import sys

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from . import config, route53, summary, template
from .distribution import prepare_resources
from .errors import ApiCloudFrontError, ConfigurationError

# CloudFront only accepts certificates from us-east-1
DEFAULT_ACM_REGION = 'us-east-1'


def _session(profile, region=None):
    kwargs = {}
    if region:
        kwargs['region_name'] = region
    if profile and profile != 'default':
        return boto3.Session(profile_name=profile, **kwargs)
    return boto3.Session(**kwargs)


def create_deployment_artifacts(config_dict, template_path, stage, session, acm_region=DEFAULT_ACM_REGION, output_path=None):
    """
    Prepare the CloudFront resources and merge them into the compiled template.
    The template file is only written once preparation fully succeeded.
    """
    base_template = template.read_template(template_path)
    resources = template.load_resources()

    api_name = config.api_gateway_name(config_dict, stage)
    settings = config.read_settings(config_dict, stage, api_name)
    acm_client = session.client('acm', region_name=acm_region)

    prepared = prepare_resources(resources, settings, acm_client)
    template.merge_template(base_template, prepared)

    out = output_path or template_path
    template.write_template(base_template, out)
    print(f"Added CloudFront distribution for {', '.join(settings['domains'])} to {out}")
    return base_template


def print_summary(config_dict, stack_name, session):
    cloudformation = session.client('cloudformation')
    outputs = summary.describe_stack_outputs(cloudformation, stack_name)
    full_domain_name = config.get_config(config_dict, 'fullDomainName', None)
    result = summary.build_summary(outputs, full_domain_name)
    if not result:
        return None

    print("CloudFront domain name")
    print(f"  {result['distribution_domain']} (CNAME: {', '.join(result['aliases'])})")
    return result


def upsert_dns(config_dict, stack_name, session):
    """Point every configured domain at the deployed distribution."""
    domains = config.read_domains(config_dict)
    host_name = config.derive_host_name(domains[0])

    outputs = summary.describe_stack_outputs(session.client('cloudformation'), stack_name)
    distribution_domain = summary.find_distribution_domain(outputs)
    if not distribution_domain:
        raise ConfigurationError(f"Stack {stack_name} has no {summary.DISTRIBUTION_OUTPUT_KEY} output")

    hosted_zone_id = route53.upsert_alias_records(session.client('route53'), domains, host_name, distribution_domain)
    if not hosted_zone_id:
        raise ConfigurationError(f"No Route53 hosted zone found for {host_name}")
    return hosted_zone_id


def main(argv=None):
    parser = argparse.ArgumentParser(description="Add a CloudFront distribution and DNS record to an API deployment")
    parser.add_argument("--config", "-c", default="serverless.yml", help="Project YAML config")
    parser.add_argument("--template", "-t", help="Compiled CloudFormation template to extend (JSON or YAML)")
    parser.add_argument("--output", "-o", help="Write the extended template here (default: overwrite --template)")
    parser.add_argument("--stage", "-s", help="Deployment stage (default: provider.stage or 'dev')")
    parser.add_argument("--profile", help="AWS profile (default: provider.profile or ambient credentials)")
    parser.add_argument("--acm-region", default=DEFAULT_ACM_REGION, help="Region to look up certificates in")
    parser.add_argument("--stack-name", help="Deployed stack (default: <service>-<stage>)")
    parser.add_argument("--summary", action="store_true", help="Print the deployed CloudFront domain name")
    parser.add_argument("--upsert-dns", action="store_true", help="Upsert Route53 alias records for the deployed distribution")
    args = parser.parse_args(argv)

    try:
        config_path = args.config
        if not os.path.isabs(config_path):
            config_path = os.path.join(os.getcwd(), config_path)
        config_dict = config.load_config(config_path)

        provider = config_dict.get('provider') or {}
        stage = args.stage or provider.get('stage', 'dev')
        profile = args.profile or provider.get('profile', 'default')
        session = _session(profile, provider.get('region'))
        if args.summary or args.upsert_dns:
            stack_name = args.stack_name or f"{config.service_name(config_dict)}-{stage}"

        if args.summary:
            print_summary(config_dict, stack_name, session)
            return
        if args.upsert_dns:
            upsert_dns(config_dict, stack_name, session)
            return

        if not args.template:
            print("Error: --template is required to prepare the CloudFront resources", file=sys.stderr)
            sys.exit(1)
        create_deployment_artifacts(config_dict, args.template, stage, session, acm_region=args.acm_region, output_path=args.output)
    except ApiCloudFrontError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except (ClientError, BotoCoreError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
