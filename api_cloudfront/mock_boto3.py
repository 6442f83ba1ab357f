#!/usr/bin/env python3
"""
In-memory mock boto3 clients with the same interface as real AWS clients.
All state is stored in memory for testing without hitting AWS.
"""
from copy import deepcopy

from botocore.exceptions import ClientError


def _client_error(code, message="", operation_name="Operation"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation_name)


class MockACMClient:
    """In-memory ACM client. State: certificate summaries in listing order."""

    def __init__(self, state=None, region="us-east-1"):
        self._region = region
        if state is not None:
            self._certs = state.setdefault("certificates", [])
            self._calls = state.setdefault("calls", [])
        else:
            self._certs = []
            self._calls = []
        self._next_arn_id = 1

    @property
    def state(self):
        return {"certificates": list(self._certs), "calls": list(self._calls)}

    @property
    def calls(self):
        return self._calls

    def add_certificate(self, domain, arn=None, status="ISSUED"):
        if arn is None:
            arn = f"arn:aws:acm:{self._region}:123456789012:certificate/{self._next_arn_id}"
            self._next_arn_id += 1
        self._certs.append({"CertificateArn": arn, "DomainName": domain, "Status": status})
        return arn

    def list_certificates(self, CertificateStatuses=None, **kwargs):
        self._calls.append({"CertificateStatuses": list(CertificateStatuses or [])})
        certs = [c for c in self._certs if not CertificateStatuses or c["Status"] in CertificateStatuses]
        summary = [{"CertificateArn": c["CertificateArn"], "DomainName": c["DomainName"]} for c in certs]
        return {"CertificateSummaryList": summary}


class MockRoute53Client:
    """In-memory Route53 client. State: hosted_zones and record_sets."""

    def __init__(self, state=None):
        if state is not None:
            self._hosted_zones = state.setdefault("hosted_zones", [])
            self._record_sets = state.setdefault("record_sets", {})  # zone_id -> list of record dicts
        else:
            self._hosted_zones = []
            self._record_sets = {}

    @property
    def state(self):
        return {"hosted_zones": list(self._hosted_zones), "record_sets": dict(self._record_sets)}

    def get_paginator(self, operation_name):
        if operation_name != "list_hosted_zones":
            raise ValueError(f"Unknown paginator: {operation_name}")

        class Paginator:
            def __init__(pag_self, zones):
                pag_self._zones = zones

            def paginate(pag_self, **kwargs):
                yield {"HostedZones": pag_self._zones, "IsTruncated": False}

        return Paginator(self._hosted_zones)

    def change_resource_record_sets(self, HostedZoneId=None, ChangeBatch=None):
        if not any(z["Id"] == HostedZoneId for z in self._hosted_zones):
            raise _client_error("NoSuchHostedZone", f"No hosted zone found with ID: {HostedZoneId}", "ChangeResourceRecordSets")
        records = self._record_sets.setdefault(HostedZoneId, [])
        for change in ChangeBatch.get("Changes", []):
            action = change["Action"]
            rr = change["ResourceRecordSet"]
            name = rr["Name"] if rr["Name"].endswith(".") else rr["Name"] + "."
            existing = [r for r in records if r.get("Name") == name and r.get("Type") == rr["Type"]]
            stored = deepcopy(rr)
            stored["Name"] = name
            if action == "CREATE":
                if existing:
                    raise _client_error("InvalidChangeBatch", "ResourceRecordSetAlreadyExists", "ChangeResourceRecordSets")
                records.append(stored)
            elif action == "UPSERT":
                records[:] = [r for r in records if not (r.get("Name") == name and r.get("Type") == rr["Type"])]
                records.append(stored)
        return {"ChangeInfo": {"Id": "change-1", "Status": "PENDING", "Comment": ChangeBatch.get("Comment", "")}}

    def add_hosted_zone(self, zone_id, name):
        name = name[:-1] if name.endswith(".") else name
        self._hosted_zones.append({"Id": zone_id, "Name": name + ".", "CallerReference": "test"})


class MockCloudFormationClient:
    """In-memory CloudFormation client. State: stacks by name with their outputs."""

    def __init__(self, state=None):
        self._stacks = state.setdefault("stacks", {}) if state is not None else {}

    @property
    def state(self):
        return {"stacks": dict(self._stacks)}

    def add_stack(self, stack_name, outputs=None):
        self._stacks[stack_name] = {
            "StackName": stack_name,
            "StackStatus": "UPDATE_COMPLETE",
            "Outputs": [{"OutputKey": k, "OutputValue": v} for k, v in (outputs or {}).items()],
        }

    def describe_stacks(self, StackName=None):
        if StackName not in self._stacks:
            raise _client_error("ValidationError", f"Stack with id {StackName} does not exist", "DescribeStacks")
        return {"Stacks": [deepcopy(self._stacks[StackName])]}


class MockSession:
    """Mock boto3.Session that returns in-memory clients. State is shared per service type."""

    def __init__(self, profile_name=None, region_name=None):
        self.profile_name = profile_name
        self.region_name = region_name
        self._acm_state = {}
        self._route53_state = {}
        self._cloudformation_state = {}

    def client(self, service_name, region_name=None):
        region = region_name or self.region_name
        if service_name == "acm":
            return MockACMClient(self._acm_state, region=region or "us-east-1")
        if service_name == "route53":
            return MockRoute53Client(self._route53_state)
        if service_name == "cloudformation":
            return MockCloudFormationClient(self._cloudformation_state)
        raise ValueError(f"Unknown service: {service_name}")

    def seed_acm_certificate(self, arn, domain, status="ISSUED"):
        """Add an ACM certificate for tests."""
        self._acm_state.setdefault("certificates", []).append(
            {"CertificateArn": arn, "DomainName": domain, "Status": status}
        )

    def seed_route53_hosted_zone(self, zone_id, name):
        """Add a hosted zone for tests (e.g. find_hosted_zone_id)."""
        name = name[:-1] if name.endswith(".") else name
        self._route53_state.setdefault("hosted_zones", []).append(
            {"Id": zone_id, "Name": name + ".", "CallerReference": "test"}
        )

    def seed_stack(self, stack_name, outputs=None):
        """Add a deployed stack with the given {OutputKey: OutputValue} outputs."""
        MockCloudFormationClient(self._cloudformation_state).add_stack(stack_name, outputs)

    @property
    def acm_calls(self):
        return self._acm_state.get("calls", [])

    @property
    def record_sets(self):
        return self._route53_state.get("record_sets", {})
