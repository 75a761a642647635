# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Iterable, List

import maint

# Often unnecessary on Ubuntu 24.04 servers, or increasing attack surface.
# Review before running, disabling some of these breaks expected functionality.
UBUNTU_24_SERVICES = [
    # Core services often disabled on minimal server installs
    'bluetooth', 'accounts-daemon', 'avahi-daemon', 'brltty', 'debug-shell',
    'ModemManager', 'pppd-dns', 'cups',
    # Additional candidates
    'apport', 'whoopsie', 'isc-dhcp-server', 'slapd', 'nfs-server', 'named',
    'dnsmasq', 'vsftpd', 'dovecot', 'rpcbind', 'rsync', 'smbd', 'snmpd', 'tftpd',
    'squid', 'apache2', 'nginx', 'xinetd', 'ypbind', 'ypserv', 'postfix', 'mysql',
    'mariadb', 'atd', 'autofs',
]


def disable(services: Iterable[str] = UBUNTU_24_SERVICES) -> List[str]:
    """Disable the services and return those that failed."""
    failed = []
    for s in services:
        unit = s if '.' in s else s + '.service'
        print(f"Disabling {unit}")
        if not maint.run(['systemctl', 'disable', unit]):
            failed.append(unit)

    if failed:
        print(f"WARNING: Failed to disable: {', '.join(failed)}")
    return failed
