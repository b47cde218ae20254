"""
Static category taxonomy: generic categories and the domain lookup table.

Both tables are read-only mappings built once at import time. Order
matters: the resolver's prefix pass walks DOMAIN_CATEGORY_MAP in
declaration order, and keyword ties go to the first category declared.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from tab_organizer.agents.models import ClusterColor

OTHERS = "Others"


@dataclass(frozen=True)
class CategoryConfig:
    """Display color and matching keywords for a generic category."""

    color: ClusterColor
    keywords: tuple[str, ...] = ()


GENERIC_CATEGORIES: Mapping[str, CategoryConfig] = MappingProxyType({
    "AI": CategoryConfig(
        ClusterColor.PURPLE,
        ("ai", "chatbot", "assistant", "prompt", "llm", "gpt", "claude", "gemini",
         "copilot", "artificial intelligence", "machine learning"),
    ),
    "Social Media": CategoryConfig(
        ClusterColor.BLUE,
        ("feed", "timeline", "followers", "post", "tweet", "like", "share", "profile", "social"),
    ),
    "Entertainment": CategoryConfig(
        ClusterColor.RED,
        ("watch", "stream", "video", "movie", "music", "podcast", "episode", "play", "game", "gaming"),
    ),
    "Travel": CategoryConfig(
        ClusterColor.CYAN,
        ("flight", "hotel", "booking", "trip", "vacation", "travel", "destination", "tour", "reservation"),
    ),
    "Shopping": CategoryConfig(
        ClusterColor.YELLOW,
        ("cart", "buy", "price", "product", "order", "shop", "checkout", "sale", "deal", "discount"),
    ),
    "Finance": CategoryConfig(
        ClusterColor.GREEN,
        ("bank", "payment", "balance", "transaction", "money", "invest", "stock", "crypto", "wallet"),
    ),
    "Development": CategoryConfig(
        ClusterColor.GREY,
        ("code", "repository", "pull request", "api", "developer", "programming", "debug", "git",
         "npm", "deploy"),
    ),
    "Documents": CategoryConfig(
        ClusterColor.ORANGE,
        ("document", "spreadsheet", "presentation", "docs", "sheet", "slides", "pdf", "file", "edit"),
    ),
    "Communication": CategoryConfig(
        ClusterColor.PINK,
        ("chat", "message", "meeting", "email", "inbox", "call", "video call", "conference",
         "slack", "teams"),
    ),
    "Learning": CategoryConfig(
        ClusterColor.CYAN,
        ("course", "lesson", "tutorial", "education", "learn", "training", "class", "lecture", "study"),
    ),
    "News": CategoryConfig(
        ClusterColor.GREY,
        ("news", "article", "breaking", "report", "headline", "latest", "update", "world", "politics"),
    ),
    "Reference": CategoryConfig(
        ClusterColor.BLUE,
        ("wiki", "documentation", "guide", "reference", "manual", "api docs", "definition",
         "encyclopedia"),
    ),
    "Productivity": CategoryConfig(
        ClusterColor.GREEN,
        ("calendar", "todo", "task", "project", "plan", "schedule", "organize", "reminder", "deadline"),
    ),
    OTHERS: CategoryConfig(ClusterColor.GREY),
})


# Keys are hostnames ("github.com") or hostname+path prefixes ("google.com/maps")
DOMAIN_CATEGORY_MAP: Mapping[str, str] = MappingProxyType({
    # AI Tools
    "chat.openai.com": "AI",
    "chatgpt.com": "AI",
    "manus.im": "AI",
    "openai.com": "AI",
    "claude.ai": "AI",
    "anthropic.com": "AI",
    "gemini.google.com": "AI",
    "bard.google.com": "AI",
    "perplexity.ai": "AI",
    "poe.com": "AI",
    "copilot.microsoft.com": "AI",
    "huggingface.co": "AI",
    "replicate.com": "AI",
    "midjourney.com": "AI",
    "stability.ai": "AI",
    "runway.ml": "AI",
    "character.ai": "AI",
    "inflection.ai": "AI",
    "pi.ai": "AI",
    "you.com": "AI",
    "phind.com": "AI",
    "deepl.com": "AI",
    "grammarly.com": "AI",
    "jasper.ai": "AI",
    "copy.ai": "AI",
    "writesonic.com": "AI",
    "notion.so/ai": "AI",

    # Social Media
    "facebook.com": "Social Media",
    "fb.com": "Social Media",
    "twitter.com": "Social Media",
    "x.com": "Social Media",
    "instagram.com": "Social Media",
    "linkedin.com": "Social Media",
    "reddit.com": "Social Media",
    "tiktok.com": "Social Media",
    "threads.net": "Social Media",
    "mastodon.social": "Social Media",
    "tumblr.com": "Social Media",
    "pinterest.com": "Social Media",
    "snapchat.com": "Social Media",
    "discord.com": "Social Media",
    "quora.com": "Social Media",
    "bluesky.app": "Social Media",
    "bsky.app": "Social Media",

    # Entertainment
    "youtube.com": "Entertainment",
    "youtu.be": "Entertainment",
    "netflix.com": "Entertainment",
    "spotify.com": "Entertainment",
    "open.spotify.com": "Entertainment",
    "twitch.tv": "Entertainment",
    "disneyplus.com": "Entertainment",
    "primevideo.com": "Entertainment",
    "hulu.com": "Entertainment",
    "hbomax.com": "Entertainment",
    "max.com": "Entertainment",
    "peacocktv.com": "Entertainment",
    "crunchyroll.com": "Entertainment",
    "funimation.com": "Entertainment",
    "soundcloud.com": "Entertainment",
    "vimeo.com": "Entertainment",
    "dailymotion.com": "Entertainment",
    "pandora.com": "Entertainment",
    "deezer.com": "Entertainment",
    "tidal.com": "Entertainment",
    "apple.com/music": "Entertainment",
    "music.apple.com": "Entertainment",
    "steam.com": "Entertainment",
    "steampowered.com": "Entertainment",
    "epicgames.com": "Entertainment",
    "xbox.com": "Entertainment",
    "playstation.com": "Entertainment",
    "ign.com": "Entertainment",
    "imdb.com": "Entertainment",
    "rottentomatoes.com": "Entertainment",

    # Travel
    "booking.com": "Travel",
    "airbnb.com": "Travel",
    "expedia.com": "Travel",
    "tripadvisor.com": "Travel",
    "kayak.com": "Travel",
    "skyscanner.com": "Travel",
    "hotels.com": "Travel",
    "agoda.com": "Travel",
    "vrbo.com": "Travel",
    "hostelworld.com": "Travel",
    "priceline.com": "Travel",
    "hotwire.com": "Travel",
    "orbitz.com": "Travel",
    "travelocity.com": "Travel",
    "cheapflights.com": "Travel",
    "google.com/maps": "Travel",
    "maps.google.com": "Travel",
    "google.com/travel": "Travel",
    "waze.com": "Travel",
    "uber.com": "Travel",
    "lyft.com": "Travel",
    "rome2rio.com": "Travel",
    "lonelyplanet.com": "Travel",
    "viator.com": "Travel",
    "getyourguide.com": "Travel",
    # Airlines
    "delta.com": "Travel",
    "united.com": "Travel",
    "aa.com": "Travel",
    "southwest.com": "Travel",
    "jetblue.com": "Travel",
    "emirates.com": "Travel",
    "britishairways.com": "Travel",
    "airindia.com": "Travel",
    "makemytrip.com": "Travel",
    "goibibo.com": "Travel",
    "cleartrip.com": "Travel",
    "ixigo.com": "Travel",
    "yatra.com": "Travel",

    # Shopping
    "amazon.com": "Shopping",
    "amazon.in": "Shopping",
    "amazon.co.uk": "Shopping",
    "amazon.de": "Shopping",
    "ebay.com": "Shopping",
    "flipkart.com": "Shopping",
    "walmart.com": "Shopping",
    "target.com": "Shopping",
    "etsy.com": "Shopping",
    "alibaba.com": "Shopping",
    "aliexpress.com": "Shopping",
    "wish.com": "Shopping",
    "shopify.com": "Shopping",
    "bestbuy.com": "Shopping",
    "newegg.com": "Shopping",
    "costco.com": "Shopping",
    "homedepot.com": "Shopping",
    "lowes.com": "Shopping",
    "ikea.com": "Shopping",
    "wayfair.com": "Shopping",
    "overstock.com": "Shopping",
    "zappos.com": "Shopping",
    "asos.com": "Shopping",
    "shein.com": "Shopping",
    "zara.com": "Shopping",
    "hm.com": "Shopping",
    "uniqlo.com": "Shopping",
    "nike.com": "Shopping",
    "adidas.com": "Shopping",
    "myntra.com": "Shopping",
    "ajio.com": "Shopping",
    "nykaa.com": "Shopping",
    "meesho.com": "Shopping",

    # Finance
    "paypal.com": "Finance",
    "stripe.com": "Finance",
    "coinbase.com": "Finance",
    "robinhood.com": "Finance",
    "binance.com": "Finance",
    "kraken.com": "Finance",
    "razorpay.com": "Finance",
    "paytm.com": "Finance",
    "phonepe.com": "Finance",
    "gpay.app": "Finance",
    "venmo.com": "Finance",
    "cashapp.com": "Finance",
    "wise.com": "Finance",
    "revolut.com": "Finance",
    "chase.com": "Finance",
    "bankofamerica.com": "Finance",
    "wellsfargo.com": "Finance",
    "citi.com": "Finance",
    "capitalone.com": "Finance",
    "discover.com": "Finance",
    "americanexpress.com": "Finance",
    "fidelity.com": "Finance",
    "schwab.com": "Finance",
    "etrade.com": "Finance",
    "tdameritrade.com": "Finance",
    "vanguard.com": "Finance",
    "mint.com": "Finance",
    "ynab.com": "Finance",
    "personalcapital.com": "Finance",
    "nerdwallet.com": "Finance",
    "creditkarma.com": "Finance",
    "zerodha.com": "Finance",
    "groww.in": "Finance",
    "upstox.com": "Finance",
    "kite.zerodha.com": "Finance",
    "moneycontrol.com": "Finance",
    "tradingview.com": "Finance",
    "investing.com": "Finance",
    "yahoo.com/finance": "Finance",
    "finance.yahoo.com": "Finance",

    # Development
    "github.com": "Development",
    "gitlab.com": "Development",
    "bitbucket.org": "Development",
    "stackoverflow.com": "Development",
    "stackexchange.com": "Development",
    "npmjs.com": "Development",
    "pypi.org": "Development",
    "rubygems.org": "Development",
    "crates.io": "Development",
    "packagist.org": "Development",
    "nuget.org": "Development",
    "maven.apache.org": "Development",
    "vercel.com": "Development",
    "netlify.com": "Development",
    "heroku.com": "Development",
    "render.com": "Development",
    "railway.app": "Development",
    "fly.io": "Development",
    "digitalocean.com": "Development",
    "aws.amazon.com": "Development",
    "console.aws.amazon.com": "Development",
    "cloud.google.com": "Development",
    "console.cloud.google.com": "Development",
    "azure.microsoft.com": "Development",
    "portal.azure.com": "Development",
    "firebase.google.com": "Development",
    "supabase.com": "Development",
    "planetscale.com": "Development",
    "mongodb.com": "Development",
    "redis.com": "Development",
    "docker.com": "Development",
    "hub.docker.com": "Development",
    "kubernetes.io": "Development",
    "terraform.io": "Development",
    "localhost": "Development",
    "127.0.0.1": "Development",
    "codepen.io": "Development",
    "codesandbox.io": "Development",
    "replit.com": "Development",
    "jsfiddle.net": "Development",
    "glitch.com": "Development",
    "regex101.com": "Development",
    "jsonformatter.org": "Development",
    "jwt.io": "Development",

    # Documents
    "docs.google.com": "Documents",
    "sheets.google.com": "Documents",
    "slides.google.com": "Documents",
    "drive.google.com": "Documents",
    "notion.so": "Documents",
    "coda.io": "Documents",
    "airtable.com": "Documents",
    "dropbox.com": "Documents",
    "box.com": "Documents",
    "onedrive.live.com": "Documents",
    "sharepoint.com": "Documents",
    "office.com": "Documents",
    "office365.com": "Documents",
    "evernote.com": "Documents",
    "onenote.com": "Documents",
    "confluence.atlassian.com": "Documents",
    "paper.dropbox.com": "Documents",
    "quip.com": "Documents",
    "zoho.com/docs": "Documents",
    "canva.com": "Documents",
    "figma.com": "Documents",
    "miro.com": "Documents",
    "lucidchart.com": "Documents",
    "diagrams.net": "Documents",
    "draw.io": "Documents",
    "overleaf.com": "Documents",
    "typst.app": "Documents",

    # Communication
    "mail.google.com": "Communication",
    "gmail.com": "Communication",
    "outlook.live.com": "Communication",
    "outlook.office.com": "Communication",
    "outlook.com": "Communication",
    "mail.yahoo.com": "Communication",
    "protonmail.com": "Communication",
    "proton.me": "Communication",
    "tutanota.com": "Communication",
    "fastmail.com": "Communication",
    "slack.com": "Communication",
    "app.slack.com": "Communication",
    "teams.microsoft.com": "Communication",
    "zoom.us": "Communication",
    "meet.google.com": "Communication",
    "whereby.com": "Communication",
    "webex.com": "Communication",
    "gotomeeting.com": "Communication",
    "whatsapp.com": "Communication",
    "web.whatsapp.com": "Communication",
    "telegram.org": "Communication",
    "web.telegram.org": "Communication",
    "signal.org": "Communication",
    "messenger.com": "Communication",
    "intercom.com": "Communication",
    "crisp.chat": "Communication",
    "zendesk.com": "Communication",
    "freshdesk.com": "Communication",
    "helpscout.com": "Communication",

    # Learning
    "coursera.org": "Learning",
    "udemy.com": "Learning",
    "edx.org": "Learning",
    "khanacademy.org": "Learning",
    "skillshare.com": "Learning",
    "pluralsight.com": "Learning",
    "linkedin.com/learning": "Learning",
    "lynda.com": "Learning",
    "codecademy.com": "Learning",
    "freecodecamp.org": "Learning",
    "leetcode.com": "Learning",
    "hackerrank.com": "Learning",
    "codewars.com": "Learning",
    "exercism.org": "Learning",
    "brilliant.org": "Learning",
    "masterclass.com": "Learning",
    "duolingo.com": "Learning",
    "memrise.com": "Learning",
    "babbel.com": "Learning",
    "busuu.com": "Learning",
    "udacity.com": "Learning",
    "datacamp.com": "Learning",
    "treehouse.com": "Learning",
    "frontendmasters.com": "Learning",
    "egghead.io": "Learning",
    "laracasts.com": "Learning",
    "mit.edu": "Learning",
    "stanford.edu": "Learning",
    "harvard.edu": "Learning",
    "berkeley.edu": "Learning",
    "classroom.google.com": "Learning",

    # News
    "news.google.com": "News",
    "cnn.com": "News",
    "bbc.com": "News",
    "bbc.co.uk": "News",
    "nytimes.com": "News",
    "theguardian.com": "News",
    "reuters.com": "News",
    "apnews.com": "News",
    "wsj.com": "News",
    "washingtonpost.com": "News",
    "forbes.com": "News",
    "bloomberg.com": "News",
    "cnbc.com": "News",
    "foxnews.com": "News",
    "nbcnews.com": "News",
    "abcnews.go.com": "News",
    "cbsnews.com": "News",
    "usatoday.com": "News",
    "huffpost.com": "News",
    "vice.com": "News",
    "vox.com": "News",
    "buzzfeed.com": "News",
    "theatlantic.com": "News",
    "economist.com": "News",
    "time.com": "News",
    "newsweek.com": "News",
    "techcrunch.com": "News",
    "theverge.com": "News",
    "wired.com": "News",
    "arstechnica.com": "News",
    "engadget.com": "News",
    "gizmodo.com": "News",
    "mashable.com": "News",
    "cnet.com": "News",
    "zdnet.com": "News",
    "venturebeat.com": "News",
    "thenextweb.com": "News",
    "hindustantimes.com": "News",
    "timesofindia.indiatimes.com": "News",
    "ndtv.com": "News",
    "indianexpress.com": "News",
    "thehindu.com": "News",

    # Reference
    "wikipedia.org": "Reference",
    "en.wikipedia.org": "Reference",
    "developer.mozilla.org": "Reference",
    "mdn.io": "Reference",
    "w3schools.com": "Reference",
    "devdocs.io": "Reference",
    "docs.python.org": "Reference",
    "docs.rust-lang.org": "Reference",
    "go.dev": "Reference",
    "typescriptlang.org": "Reference",
    "reactjs.org": "Reference",
    "react.dev": "Reference",
    "vuejs.org": "Reference",
    "angular.io": "Reference",
    "svelte.dev": "Reference",
    "nextjs.org": "Reference",
    "nodejs.org": "Reference",
    "expressjs.com": "Reference",
    "fastify.io": "Reference",
    "django-project.com": "Reference",
    "flask.palletsprojects.com": "Reference",
    "rubyonrails.org": "Reference",
    "laravel.com": "Reference",
    "spring.io": "Reference",
    "dart.dev": "Reference",
    "flutter.dev": "Reference",
    "kotlinlang.org": "Reference",
    "swift.org": "Reference",
    "cppreference.com": "Reference",
    "docs.microsoft.com": "Reference",
    "learn.microsoft.com": "Reference",
    "cloud.google.com/docs": "Reference",
    "docs.aws.amazon.com": "Reference",
    "merriam-webster.com": "Reference",
    "dictionary.com": "Reference",
    "thesaurus.com": "Reference",
    "britannica.com": "Reference",
    "wolframalpha.com": "Reference",
    "mathworld.wolfram.com": "Reference",
    "arxiv.org": "Reference",
    "scholar.google.com": "Reference",
    "pubmed.ncbi.nlm.nih.gov": "Reference",
    "researchgate.net": "Reference",
    "semanticscholar.org": "Reference",

    # Productivity
    "calendar.google.com": "Productivity",
    "trello.com": "Productivity",
    "asana.com": "Productivity",
    "todoist.com": "Productivity",
    "monday.com": "Productivity",
    "clickup.com": "Productivity",
    "basecamp.com": "Productivity",
    "linear.app": "Productivity",
    "height.app": "Productivity",
    "shortcut.com": "Productivity",
    "jira.atlassian.com": "Productivity",
    "youtrack.jetbrains.com": "Productivity",
    "wrike.com": "Productivity",
    "smartsheet.com": "Productivity",
    "teamwork.com": "Productivity",
    "clockify.me": "Productivity",
    "toggl.com": "Productivity",
    "harvest.com": "Productivity",
    "zapier.com": "Productivity",
    "ifttt.com": "Productivity",
    "make.com": "Productivity",
    "n8n.io": "Productivity",
    "calendly.com": "Productivity",
    "doodle.com": "Productivity",
    "when2meet.com": "Productivity",
    "1password.com": "Productivity",
    "lastpass.com": "Productivity",
    "bitwarden.com": "Productivity",
    "dashlane.com": "Productivity",
    "buffer.com": "Productivity",
    "hootsuite.com": "Productivity",
    "later.com": "Productivity",
    "loom.com": "Productivity",
    "screencastify.com": "Productivity",
})


def category_color(category: str) -> ClusterColor:
    """Color of a generic category (grey for anything unknown)."""
    config = GENERIC_CATEGORIES.get(category)
    return config.color if config else ClusterColor.GREY
