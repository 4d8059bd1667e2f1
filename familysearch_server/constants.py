"""Constants for the FamilySearch API and tree rendering."""

# GEDCOM X type URIs
GEDCOMX_PREFIX = "http://gedcomx.org/"
PARENT_CHILD = "http://gedcomx.org/ParentChild"
BIRTH = "http://gedcomx.org/Birth"
DEATH = "http://gedcomx.org/Death"
MALE = "http://gedcomx.org/Male"
FEMALE = "http://gedcomx.org/Female"

# Hosts per environment: (identity host, platform host)
ENVIRONMENTS = {
    "production": ("https://ident.familysearch.org", "https://api.familysearch.org"),
    "beta": ("https://identbeta.familysearch.org", "https://apibeta.familysearch.org"),
    "integration": ("https://identint.familysearch.org", "https://api-integ.familysearch.org"),
}
DEFAULT_ENVIRONMENT = "production"
TOKEN_PATH = "/cis-web/oauth2/v3/token"

# Media types
GEDCOMX_JSON = "application/x-gedcomx-v1+json"
GEDCOMX_ATOM_JSON = "application/x-gedcomx-atom+json"
FS_JSON = "application/x-fs-v1+json"

DEFAULT_REDIRECT_URI = "https://localhost:8080/oauth-redirect"
DEFAULT_TIMEOUT = 30.0
DEFAULT_SEARCH_LIMIT = 10

# Generation limits (default, ceiling). Descendancy fans out wider, so it is capped lower.
ANCESTOR_GENERATIONS = (4, 8)
DESCENDANT_GENERATIONS = (2, 3)

# Tool parameter name -> FamilySearch search field
SEARCH_FIELDS = {
    "name": "name",
    "given_name": "givenName",
    "surname": "surname",
    "birth_date": "birthLikeDate",
    "birth_place": "birthLikePlace",
    "death_date": "deathLikeDate",
    "death_place": "deathLikePlace",
    "gender": "gender",
}
