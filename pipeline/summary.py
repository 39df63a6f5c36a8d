"""
Output Formatting
Builds the streamed result lines and the end-of-run summary.
"""

SEPARATOR = "-" * 10 * 8


def format_line(event, sources=False, print_ips=False):
    """
    Format one discovery for display.

    Args:
        event: DiscoveryEvent to format
        sources: Prefix the line with the source tag
        print_ips: Show "name,address" instead of just the name

    Returns:
        Newline-terminated line
    """
    line = ""
    if sources:
        line += f"{'[' + event.source + '] ':<14}"
    if print_ips:
        line += f"{event.name},{event.address}\n"
    else:
        line += f"{event.name}\n"
    return line


def format_summary(total, tags, asns):
    """
    Build the summary printed after enumeration when -v is set.

    Args:
        total: Number of names discovered
        tags: Mapping of source tag -> count
        asns: Mapping of ASN -> AsnData

    Returns:
        Summary text
    """
    counts = ", ".join(f"{tag}: {count}" for tag, count in tags.items())
    lines = [f"\n{total} names discovered - {counts}\n", SEPARATOR + "\n"]

    for asn, data in asns.items():
        lines.append(f"ASN: {asn} - {data.name}\n")

        for cidr, ips in data.netblocks.items():
            label = "IP address" if ips == 1 else "IP addresses"
            lines.append(f"\t{cidr:<18}\t{str(ips):<3} {label}\n")

    return "".join(lines)
