"""MCP tool definitions for the FamilySearch server.

Tool and argument names follow the public FamilySearch MCP surface
(hyphenated tool names, camelCase arguments).
"""

# ruff: noqa: N803

from typing import Literal

from .core import (
    _authenticate,
    _configure,
    _get_ancestors,
    _get_current_user,
    _get_descendants,
    _get_person,
    _say_hello,
    _search_persons,
    _search_records,
)


def register_tools(mcp):
    """Register all MCP tools with the server."""

    # ============== SETUP TOOLS (3) ==============

    @mcp.tool(name="say-hello")
    def say_hello(name: str) -> str:
        """
        Say hello to the user.

        Args:
            name: The name of the user to say hello to
        """
        return _say_hello(name)

    @mcp.tool(name="configure")
    def configure(clientId: str, redirectUri: str | None = None) -> str:
        """
        Configure FamilySearch API credentials.

        Saved to the local config file and reused on the next start.

        Args:
            clientId: Your FamilySearch API client ID
            redirectUri: OAuth redirect URI (default: https://localhost:8080/oauth-redirect)
        """
        return _configure(clientId, redirectUri)

    @mcp.tool(name="authenticate")
    def authenticate(username: str, password: str) -> str:
        """
        Authenticate with FamilySearch.

        Requires configure() to have been called first.

        Args:
            username: Your FamilySearch username
            password: Your FamilySearch password
        """
        return _authenticate(username, password)

    # ============== ACCOUNT TOOLS (1) ==============

    @mcp.tool(name="get-current-user")
    def get_current_user() -> str:
        """
        Get information about the currently authenticated user.

        An expired access token is refreshed automatically once.
        """
        return _get_current_user()

    # ============== TREE TOOLS (3) ==============

    @mcp.tool(name="get-person")
    def get_person(personId: str) -> str:
        """
        Get detailed information about a specific person.

        Args:
            personId: FamilySearch person ID (e.g., "KWQS-BBQ")
        """
        return _get_person(personId)

    @mcp.tool(name="get-ancestors")
    def get_ancestors(personId: str, generations: int | None = None) -> str:
        """
        Get ancestors of a specific person as an indented tree.

        Args:
            personId: FamilySearch person ID
            generations: Number of generations (default: 4, max: 8)

        Examples:
            get-ancestors("KWQS-BBQ")  # Parents through great-great-grandparents
            get-ancestors("KWQS-BBQ", 8)  # Deepest tree the API returns
        """
        return _get_ancestors(personId, generations)

    @mcp.tool(name="get-descendants")
    def get_descendants(personId: str, generations: int | None = None) -> str:
        """
        Get descendants of a specific person as an indented tree.

        Args:
            personId: FamilySearch person ID
            generations: Number of generations (default: 2, max: 3)
        """
        return _get_descendants(personId, generations)

    # ============== SEARCH TOOLS (2) ==============

    @mcp.tool(name="search-persons")
    def search_persons(
        name: str | None = None,
        birthDate: str | None = None,
        birthPlace: str | None = None,
        deathDate: str | None = None,
        deathPlace: str | None = None,
        gender: Literal["MALE", "FEMALE"] | None = None,
        limit: int | None = None,
    ) -> str:
        """
        Search for person records in the FamilySearch Family Tree.

        Args:
            name: Name to search for
            birthDate: Birth date (YYYY-MM-DD)
            birthPlace: Birth place
            deathDate: Death date (YYYY-MM-DD)
            deathPlace: Death place
            gender: "MALE" or "FEMALE"
            limit: Maximum number of results (default: 10)
        """
        return _search_persons(
            name=name,
            birth_date=birthDate,
            birth_place=birthPlace,
            death_date=deathDate,
            death_place=deathPlace,
            gender=gender,
            limit=limit,
        )

    @mcp.tool(name="search-records")
    def search_records(
        givenName: str | None = None,
        surname: str | None = None,
        birthDate: str | None = None,
        birthPlace: str | None = None,
        deathDate: str | None = None,
        deathPlace: str | None = None,
        collectionId: str | None = None,
        limit: int | None = None,
    ) -> str:
        """
        Search for historical records in FamilySearch.

        Args:
            givenName: Given name
            surname: Surname/last name
            birthDate: Birth date (YYYY-MM-DD)
            birthPlace: Birth place
            deathDate: Death date (YYYY-MM-DD)
            deathPlace: Death place
            collectionId: Specific collection ID to search in
            limit: Maximum number of results (default: 10)
        """
        return _search_records(
            given_name=givenName,
            surname=surname,
            birth_date=birthDate,
            birth_place=birthPlace,
            death_date=deathDate,
            death_place=deathPlace,
            collection_id=collectionId,
            limit=limit,
        )
