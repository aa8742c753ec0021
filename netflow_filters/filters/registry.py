"""Static IANA registries for protocols and well-known ports."""

from __future__ import annotations

from functools import cmp_to_key

from netflow_filters.filters.model import FilterOption

# IANA assigned internet protocol numbers.
PROTOCOL_NUMBERS: dict[int, str] = {
    0: "HOPOPT",
    1: "ICMP",
    2: "IGMP",
    3: "GGP",
    4: "IPv4",
    5: "ST",
    6: "TCP",
    7: "CBT",
    8: "EGP",
    9: "IGP",
    10: "BBN-RCC-MON",
    11: "NVP-II",
    12: "PUP",
    14: "EMCON",
    15: "XNET",
    16: "CHAOS",
    17: "UDP",
    18: "MUX",
    19: "DCN-MEAS",
    20: "HMP",
    21: "PRM",
    22: "XNS-IDP",
    23: "TRUNK-1",
    24: "TRUNK-2",
    25: "LEAF-1",
    26: "LEAF-2",
    27: "RDP",
    28: "IRTP",
    29: "ISO-TP4",
    30: "NETBLT",
    31: "MFE-NSP",
    32: "MERIT-INP",
    33: "DCCP",
    34: "3PC",
    35: "IDPR",
    36: "XTP",
    37: "DDP",
    38: "IDPR-CMTP",
    39: "TP++",
    40: "IL",
    41: "IPv6",
    42: "SDRP",
    43: "IPv6-Route",
    44: "IPv6-Frag",
    45: "IDRP",
    46: "RSVP",
    47: "GRE",
    48: "DSR",
    49: "BNA",
    50: "ESP",
    51: "AH",
    52: "I-NLSP",
    54: "NARP",
    55: "MOBILE",
    56: "TLSP",
    57: "SKIP",
    58: "IPv6-ICMP",
    59: "IPv6-NoNxt",
    60: "IPv6-Opts",
    62: "CFTP",
    64: "SAT-EXPAK",
    65: "KRYPTOLAN",
    66: "RVD",
    67: "IPPC",
    69: "SAT-MON",
    70: "VISA",
    71: "IPCV",
    72: "CPNX",
    73: "CPHB",
    74: "WSN",
    75: "PVP",
    76: "BR-SAT-MON",
    77: "SUN-ND",
    78: "WB-MON",
    79: "WB-EXPAK",
    80: "ISO-IP",
    81: "VMTP",
    82: "SECURE-VMTP",
    83: "VINES",
    84: "IPTM",
    85: "NSFNET-IGP",
    86: "DGP",
    87: "TCF",
    88: "EIGRP",
    89: "OSPFIGP",
    90: "Sprite-RPC",
    91: "LARP",
    92: "MTP",
    93: "AX.25",
    94: "IPIP",
    96: "SCC-SP",
    97: "ETHERIP",
    98: "ENCAP",
    100: "GMTP",
    101: "IFMP",
    102: "PNNI",
    103: "PIM",
    104: "ARIS",
    105: "SCPS",
    106: "QNX",
    107: "A/N",
    108: "IPComp",
    109: "SNP",
    110: "Compaq-Peer",
    111: "IPX-in-IP",
    112: "VRRP",
    113: "PGM",
    115: "L2TP",
    116: "DDX",
    117: "IATP",
    118: "STP",
    119: "SRP",
    120: "UTI",
    121: "SMP",
    122: "SM",
    123: "PTP",
    124: "ISIS over IPv4",
    125: "FIRE",
    126: "CRTP",
    127: "CRUDP",
    128: "SSCOPMCE",
    129: "IPLT",
    130: "SPS",
    131: "PIPE",
    132: "SCTP",
    133: "FC",
    134: "RSVP-E2E-IGNORE",
    135: "Mobility Header",
    136: "UDPLite",
    137: "MPLS-in-IP",
    138: "manet",
    139: "HIP",
    140: "Shim6",
    141: "WESP",
    142: "ROHC",
    143: "Ethernet",
}

# Well-known and registered service ports.
SERVICE_PORTS: dict[int, str] = {
    7: "echo",
    20: "ftp-data",
    21: "ftp",
    22: "ssh",
    23: "telnet",
    25: "smtp",
    37: "time",
    43: "whois",
    49: "tacacs",
    53: "domain",
    67: "bootps",
    68: "bootpc",
    69: "tftp",
    70: "gopher",
    79: "finger",
    80: "http",
    88: "kerberos",
    110: "pop3",
    111: "sunrpc",
    119: "nntp",
    123: "ntp",
    135: "epmap",
    137: "netbios-ns",
    138: "netbios-dgm",
    139: "netbios-ssn",
    143: "imap",
    161: "snmp",
    162: "snmptrap",
    179: "bgp",
    194: "irc",
    389: "ldap",
    443: "https",
    445: "microsoft-ds",
    464: "kpasswd",
    465: "submissions",
    500: "isakmp",
    514: "syslog",
    515: "printer",
    520: "router",
    546: "dhcpv6-client",
    547: "dhcpv6-server",
    554: "rtsp",
    587: "submission",
    631: "ipp",
    636: "ldaps",
    853: "domain-s",
    873: "rsync",
    989: "ftps-data",
    990: "ftps",
    993: "imaps",
    995: "pop3s",
    1080: "socks",
    1194: "openvpn",
    1433: "ms-sql-s",
    1521: "ncube-lm",
    1701: "l2f",
    1812: "radius",
    1813: "radius-acct",
    2049: "nfs",
    2379: "etcd-client",
    2380: "etcd-server",
    3306: "mysql",
    3389: "ms-wbt-server",
    4789: "vxlan",
    5060: "sip",
    5061: "sips",
    5353: "mdns",
    5432: "postgresql",
    5672: "amqp",
    6379: "redis",
    6443: "sun-sr-https",
    8080: "http-alt",
    8443: "pcsync-https",
    9090: "websm",
    9092: "XmlIpcRegSvc",
    9100: "hp-pdl-datastr",
    10250: "kubelet",
    11211: "memcache",
    27017: "mongodb",
}

_PORTS_BY_SERVICE: dict[str, int] = {name.lower(): port for port, name in SERVICE_PORTS.items()}

PROTOCOL_OPTIONS: list[FilterOption] = [
    FilterOption(name=name, value=str(number)) for number, name in sorted(PROTOCOL_NUMBERS.items())
]


def is_number(value: str) -> bool:
    """Return whether a value is made of ASCII digits only."""
    return value.isascii() and value.isdigit()


def get_service(port: int) -> str | None:
    """Return the service name registered for a port number."""
    return SERVICE_PORTS.get(port)


def get_port(service: str) -> int | None:
    """Return the port number of a service name, case-insensitively."""
    return _PORTS_BY_SERVICE.get(service.lower())


def find_protocol_option(name_or_value: str) -> FilterOption | None:
    """Find a protocol by exact number or case-insensitive name."""
    lowered = name_or_value.lower()
    for option in PROTOCOL_OPTIONS:
        if option.name.lower() == lowered or option.value == name_or_value:
            return option
    return None


def format_port(port: int) -> str:
    """Format a port as ``service (port)`` when a service is known."""
    service = get_service(port)
    if service:
        return f"{service} ({port})"
    return str(port)


def _compare_ports(p1: int, p2: int) -> int:
    s1 = get_service(p1)
    s2 = get_service(p2)
    if s1 and s2:
        f1, f2 = format_port(p1).lower(), format_port(p2).lower()
        return (f1 > f2) - (f1 < f2)
    if s1:
        return -1
    if s2:
        return 1
    return p1 - p2


def sort_ports(ports: list[int]) -> list[int]:
    """Sort ports with known services first (by name), then numerically."""
    return sorted(ports, key=cmp_to_key(_compare_ports))
