"""
Constants for bot detection, categorization and log format recognition.
"""

# =============================================================================
# Analysis Defaults
# =============================================================================

# Number of content lines inspected for format detection
DEFAULT_SAMPLE_SIZE = 10

# Number of entries kept in FileStats.top_bots
DEFAULT_TOP_N = 5

# Worker threads for multi-file runs (1 = sequential)
DEFAULT_MAX_WORKERS = 4

DEFAULT_ENCODING = "utf-8"

# =============================================================================
# Log Format Markers
# =============================================================================

# IIS W3C header directives
IIS_METADATA_MARKERS = ("#Software", "#Version", "#Date", "#Fields")

# Minimum whitespace-separated fields in an IIS data row
IIS_MIN_FIELDS = 14

# IIS rows are split into at most this many tokens so the trailing
# field keeps its embedded spaces
IIS_MAX_TOKENS = 15

# 0-based index of cs(User-Agent) in the default IIS field layout
IIS_USER_AGENT_INDEX = 9

# Tokens that identify a quoted field as a user-agent when the
# Apache layout is irregular
APACHE_FALLBACK_TOKENS = ("Mozilla", "bot", "Bot", "crawler", "spider", "scan")

# A user-agent starting with one of these is a mis-extracted request line
HTTP_METHOD_TOKENS = frozenset(["GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS"])

# =============================================================================
# AI Agents
# =============================================================================

# Kept separate because categorization reports AI traffic on its own
AI_BOT_PATTERNS = (
    # OpenAI
    "gptbot",
    "chatgpt-user",
    "oai-searchbot",
    # Anthropic
    "claudebot",
    "claude-user",
    "claude-searchbot",
    "claude-web",
    "anthropic-ai",
    # Google
    "google-extended",
    "googleother",
    # Perplexity
    "perplexitybot",
    "perplexity-user",
    # Apple
    "applebot-extended",
    # Meta
    "meta-externalagent",
    "meta-externalfetcher",
    "facebookbot",
    # Others
    "ccbot",
    "bytespider",
    "amazonbot",
    "cohere-ai",
    "diffbot",
    "youbot",
    "ai2bot",
    "omgili",
    "timpibot",
    "imagesiftbot",
    "petalbot",
    "mistralai-user",
)

# =============================================================================
# Bot Identification
# =============================================================================

# Ordered: the classifier stops at the first match
BOT_PATTERNS = (
    # Generic tokens
    "bot",
    "crawler",
    "spider",
    "scraper",
    # Search engines
    "googlebot",
    "bingbot",
    "slurp",
    "duckduckbot",
    "baiduspider",
    "yandex",
    "sogou",
    "exabot",
    "seznambot",
    "naverbot",
    "applebot",
    # Social media link previews
    "facebookexternalhit",
    "twitterbot",
    "linkedinbot",
    "slackbot",
    "discordbot",
    "telegrambot",
    "whatsapp",
    "pinterest",
    "redditbot",
    # SEO / marketing
    "ahrefsbot",
    "semrushbot",
    "mj12bot",
    "dotbot",
    "rogerbot",
    "screaming frog",
    "serpstatbot",
    "blexbot",
    "dataforseobot",
    # Monitoring / uptime
    "uptimerobot",
    "pingdom",
    "statuscake",
    "site24x7",
    "newrelicpinger",
    "datadog",
    # Archival
    "ia_archiver",
    r"archive\.org_bot",
    "heritrix",
    # Security scanners
    "nmap",
    "nikto",
    "sqlmap",
    "masscan",
    "zgrab",
    "censys",
    "nuclei",
    # HTTP libraries and command line clients
    r"python-requests",
    r"python-urllib",
    r"go-http-client",
    r"curl/",
    r"wget/",
    r"libwww-perl",
    r"headlesschrome",
) + AI_BOT_PATTERNS

# =============================================================================
# Categorization
# =============================================================================

CATEGORY_AI = "AI Agents"
CATEGORY_SEARCH = "Search Engines"
CATEGORY_SEO = "SEO/Marketing"

# Independent tallies: a user-agent may count in more than one category
CATEGORY_PATTERNS = {
    CATEGORY_AI: AI_BOT_PATTERNS,
    CATEGORY_SEARCH: (
        "googlebot",
        "bingbot",
        "slurp",
        "duckduckbot",
        "baiduspider",
        "yandexbot",
        "sogou",
        "exabot",
        "seznambot",
        "naverbot",
        "applebot",
    ),
    CATEGORY_SEO: (
        "ahrefsbot",
        "semrushbot",
        "mj12bot",
        "dotbot",
        "rogerbot",
        "screaming frog",
        "serpstatbot",
        "blexbot",
        "dataforseobot",
    ),
}
