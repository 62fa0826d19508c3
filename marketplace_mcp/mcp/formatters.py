"""
Text rendering for MCP tool results.

Agents read tool output as text, so every marketplace response is turned
into compact Markdown here.
"""

from typing import List

from ..domain.package import (
    Asset,
    Examples,
    PackageMetadata,
    PackageResources,
    RepositoryResponse,
    SearchResponse,
)

# Extra guidance appended to asset output, keyed by asset type
ASSET_NOTES = {
    'docs': (
        "**About Documentation:**",
        "This documentation provides detailed information about the package and its usage.",
    ),
    'readme': (
        "**About the README:**",
        "The README gives an overview of the package and how to get started with it.",
    ),
    'releaseNotes': (
        "**About Release Notes:**",
        "Release notes describe what changed in this version of the package.",
    ),
    'sbom': (
        "**About the SBOM:**",
        "The software bill of materials lists the components this package is built from.",
    ),
}


def _yes_no(value: bool) -> str:
    return 'true' if value else 'false'


def _date(timestamp) -> str:
    return timestamp[:10] if timestamp else ''


def format_search_results(result: SearchResponse) -> str:
    if not result.packages:
        return "No packages found."

    lines: List[str] = [f"Found {result.total or len(result.packages)} packages:", ""]

    for pkg in result.packages:
        lines.append(f"**{pkg.account}/{pkg.repository}**")
        if pkg.description:
            lines.append(f"Description: {pkg.description}")
        if pkg.type:
            lines.append(f"Type: {pkg.type}")
        if pkg.tier:
            lines.append(f"Tier: {pkg.tier}")
        if pkg.version:
            lines.append(f"Version: {pkg.version}")
        lines.append(f"Public: {_yes_no(pkg.public)}")
        if pkg.stars:
            lines.append(f"Stars: {pkg.stars}")
        if pkg.downloads:
            lines.append(f"Downloads: {pkg.downloads}")
        if pkg.tags:
            lines.append(f"Tags: {', '.join(pkg.tags)}")
        lines.append("")

    return "\n".join(lines)


def format_package_metadata(metadata: PackageMetadata) -> str:
    lines: List[str] = [f"# {metadata.account}/{metadata.repository}", ""]

    if metadata.description:
        lines.extend([f"**Description:** {metadata.description}", ""])

    lines.append(f"**Type:** {metadata.type}")
    lines.append(f"**Public:** {_yes_no(metadata.public)}")
    if metadata.tier:
        lines.append(f"**Tier:** {metadata.tier}")
    if metadata.license:
        lines.append(f"**License:** {metadata.license}")
    if metadata.latest_version:
        lines.append(f"**Latest Version:** {metadata.latest_version}")
    if metadata.versions:
        lines.append(f"**Available Versions:** {', '.join(metadata.versions)}")
    if metadata.homepage:
        lines.append(f"**Homepage:** {metadata.homepage}")
    if metadata.documentation:
        lines.append(f"**Documentation:** {metadata.documentation}")
    if metadata.tags:
        lines.append(f"**Tags:** {', '.join(metadata.tags)}")
    if metadata.keywords:
        lines.append(f"**Keywords:** {', '.join(metadata.keywords)}")

    if metadata.dependencies:
        lines.extend(["", "## Dependencies"])
        for dep in metadata.dependencies:
            lines.append(f"- {dep.name}: {dep.version}")

    if metadata.crds:
        lines.extend(["", "## Custom Resource Definitions (CRDs)"])
        for crd in metadata.crds:
            lines.append(f"- **{crd.kind}** ({crd.group}/{crd.version})")
            if crd.description:
                lines.append(f"  Description: {crd.description}")

    if metadata.examples:
        lines.extend(["", "## Examples"])
        for example in metadata.examples:
            lines.append(f"### {example.name}")
            if example.description:
                lines.append(example.description)
            lines.extend([f"```{example.type}", example.content, "```", ""])

    if metadata.compositions:
        lines.extend(["", "## Compositions"])
        for comp in metadata.compositions:
            lines.append(f"### {comp.name}")
            if comp.description:
                lines.append(comp.description)
            if comp.resources:
                lines.append("Resources:")
                for res in comp.resources:
                    lines.append(f"- {res.name} ({res.type})")

    if metadata.functions:
        lines.extend(["", "## Functions"])
        for fn in metadata.functions:
            lines.append(f"### {fn.name}")
            if fn.description:
                lines.append(fn.description)
            lines.append(f"Version: {fn.version}")
            lines.append(f"Image: {fn.image}")

    return "\n".join(lines) + "\n"


def format_asset(asset: Asset, asset_type: str) -> str:
    """Render an asset; ``releaseNotes`` is titled ``ReleaseNotes``, not ``Releasenotes``."""
    title = asset_type[:1].upper() + asset_type[1:]
    lines: List[str] = [f"# {title} Asset", ""]

    if asset.url:
        lines.extend([
            f"**Asset URL:** {asset.url}",
            "",
            "Use this URL to download the asset directly.",
            "",
        ])

    if asset.content:
        lines.extend(["**Content:**", f"```{asset.type}", asset.content, "```"])

    if not asset.url and not asset.content:
        lines.append("No asset content was returned.")

    if asset_type in ASSET_NOTES:
        lines.append("")
        lines.extend(ASSET_NOTES[asset_type])

    return "\n".join(lines) + "\n"


def format_repositories(result: RepositoryResponse) -> str:
    if not result.repositories:
        return "No repositories found."

    lines: List[str] = [f"Found {result.count or len(result.repositories)} repositories:", ""]

    for repo in result.repositories:
        lines.append(f"**{repo.account}/{repo.name}**")
        if repo.description:
            lines.append(f"Description: {repo.description}")
        if repo.type:
            lines.append(f"Type: {repo.type}")
        lines.append(f"Public: {_yes_no(repo.public)}")
        if repo.policy:
            lines.append(f"Policy: {repo.policy}")
        if repo.package_count:
            lines.append(f"Packages: {repo.package_count}")
        if repo.created_at:
            lines.append(f"Created: {_date(repo.created_at)}")
        if repo.updated_at:
            lines.append(f"Updated: {_date(repo.updated_at)}")
        lines.append("")

    return "\n".join(lines)


def format_package_resources(resources: PackageResources) -> str:
    lines: List[str] = [f"# {resources.account}/{resources.repository} resources", ""]

    if resources.package_type:
        lines.append(f"**Package Type:** {resources.package_type}")
    if resources.tier:
        lines.append(f"**Tier:** {resources.tier}")
    if resources.digest:
        lines.append(f"**Digest:** {resources.digest}")

    if resources.crds:
        lines.extend(["", "## Custom Resource Definitions"])
        for crd in resources.crds:
            versions = ', '.join(crd.versions)
            lines.append(f"- **{crd.kind}** ({crd.group}) versions: {versions}")

    if resources.xrds:
        lines.extend(["", "## Composite Resource Definitions"])
        for xrd in resources.xrds:
            versions = ', '.join(xrd.versions)
            lines.append(f"- **{xrd.kind}** ({xrd.group}) versions: {versions}")

    if resources.compositions:
        lines.extend(["", "## Compositions"])
        for comp in resources.compositions:
            lines.append(
                f"- **{comp.name}** for {comp.xrd_kind} ({comp.xrd_api_version}), "
                f"{comp.resource_count} resources"
            )

    if not (resources.crds or resources.xrds or resources.compositions):
        lines.extend(["", "No resources found."])

    return "\n".join(lines) + "\n"


def format_examples(examples: Examples, resource_kind: str) -> str:
    if not examples.examples:
        return f"No examples found for {resource_kind}."

    lines: List[str] = [f"# {resource_kind} examples", ""]
    for i, example in enumerate(examples.examples, 1):
        lines.extend([f"## Example {i}", "```yaml", example, "```", ""])
    return "\n".join(lines)
