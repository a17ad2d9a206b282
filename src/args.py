"""Argument parsing functionality for gavcheck."""

import argparse
from constants import Constants, OutputFormats

def build_parser():
    """Builds the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gavcheck",
        description=(
            "Check Maven dependencies' availability in a particular Maven repository"
        ),
        add_help=True,
    )

    parser.add_argument("inputs",
                        help=("Maven dependencies as GroupId:ArtifactId[:Version] (GAVs), ex. "
                              "org.slf4j:slf4j-api:2.0.12 or info.picocli:picocli. Without a "
                              "version all available versions are listed, otherwise the "
                              "existence of that version is checked. These may also be URLs "
                              "to pom.xml files, GitHub repositories or GitHub pull requests."),
                        nargs="*",
                        metavar="GAV_OR_URL")

    parser.add_argument("-r", "--repository",
                        dest="REPOSITORY",
                        help=f"Maven repository root URL to search (default: {Constants.REPOSITORY_URL})",
                        action="store",
                        type=str)
    parser.add_argument("-n", "--limit",
                        dest="LIMIT",
                        help="Number of versions to list per result. Defaults to the full list.",
                        action="store",
                        type=int)
    parser.add_argument("-o", "--output-format",
                        dest="OUTPUT_FORMAT",
                        help="Output format: human, json or xml (default: human)",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS,
                        default=OutputFormats.HUMAN.value)
    parser.add_argument("-k", "--insecure",
                        dest="INSECURE",
                        help="Disable TLS validation on the remote Maven repository.",
                        action="store_true")
    parser.add_argument("-i", "--interactive",
                        dest="INTERACTIVE",
                        help="Read GAVs from stdin and check them one at a time.",
                        action="store_true")
    parser.add_argument("-w", "--workers",
                        dest="WORKERS",
                        help="Number of concurrent repository lookups.",
                        action="store",
                        type=int)

    # pom.xml processing
    parser.add_argument("--transitive",
                        dest="TRANSITIVE",
                        help="Include transitive dependencies when listing a pom.xml.",
                        action="store_true",
                        default=None)
    parser.add_argument("--scope",
                        dest="SCOPE",
                        help="Dependency scope to include when listing a pom.xml.",
                        action="store",
                        type=str)
    parser.add_argument("--include-parent-pom",
                        dest="INCLUDE_PARENT_POM",
                        help="Include the parent pom when listing a pom.xml.",
                        action="store_true",
                        default=None)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.INTERACTIVE and not args.inputs:
        parser.error("No GAV arguments")
    return args
