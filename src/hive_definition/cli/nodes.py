#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Node inventory commands: constraint filtering, host groups and node tables
"""

import tabulate

from ..constraints import filter_swarm_nodes
from ..groups import get_host_groups
from ..options import hivefs
from .base import HiveDefinitionCommand


class FilterNodes(HiveDefinitionCommand):
    """ Print the swarm nodes matching every label constraint
    """
    sub_command = 'filter'

    def add_arguments(self, parser):
        parser.add_argument('constraints', nargs='*', metavar='CONSTRAINT',
                            help='label==value or label!=value')

    def run(self, hive, args):
        for node in filter_swarm_nodes(hive, args.constraints):
            print(node.name)


class ShowHostGroups(HiveDefinitionCommand):
    """ Show host group membership
    """
    sub_command = 'groups'

    def add_arguments(self, parser):
        parser.add_argument('--exclude-pets', action='store_true',
                            help='Leave pet nodes out of every group')

    def run(self, hive, args):
        groups = get_host_groups(hive, exclude_pets=args.exclude_pets)
        rows = [
            [name, len(members), ", ".join(node.name for node in members)]
            for name, members in sorted(groups.items())
        ]
        print(tabulate.tabulate(rows, headers=["group", "count", "members"]))


def _ceph_columns(node, options):
    labels = node.labels
    roles = [role for role, placed in (("mon", labels.ceph_mon),
                                       ("osd", labels.ceph_osd),
                                       ("mds", labels.ceph_mds)) if placed]
    osd = ""
    if labels.ceph_osd:
        osd = (f"{hivefs.node_osd_drive_size_gb(node, options)}GB "
               f"cache {hivefs.node_osd_cache_size_mb(node, options)}MB "
               f"journal {hivefs.node_osd_journal_size_mb(node, options)}MB")
    mds = f"{hivefs.node_mds_cache_size_mb(node, options)}MB" if labels.ceph_mds else ""
    return [",".join(roles), osd, mds]


class ShowNodes(HiveDefinitionCommand):
    """ Show nodes with their placed roles and resolved resources
    """
    sub_command = 'nodes'

    def run(self, hive, args):
        hosting = hive.hosting
        headers = ["name", "role", "address", "ceph", "osd", "mds cache", "hivemq"]
        if hosting.environment.is_hypervisor:
            headers += ["vm", "cpus", "memory", "min memory", "disk"]

        rows = []
        for node in hive.sorted_nodes:
            mq = "manager" if node.labels.hivemq_manager else ("member" if node.labels.hivemq else "")
            row = [node.name, node.role.value, node.private_address or ""]
            row += _ceph_columns(node, hive.hivefs) if hive.hivefs.enabled else ["", "", ""]
            row.append(mq)
            if hosting.environment.is_hypervisor:
                row += [
                    hosting.get_vm_name_prefix(hive.name) + node.name,
                    node.get_vm_processors(hosting),
                    node.get_vm_memory(hosting),
                    node.get_vm_minimum_memory(hosting),
                    node.get_vm_disk(hosting),
                ]
            rows.append(row)
        print(tabulate.tabulate(rows, headers=headers))
