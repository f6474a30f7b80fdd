"""Centralized correspondence tables between item fields and CSL variables.

Adding a new CSL variable requires only adding an entry to the relevant
table. List order is priority order: on export the first non-empty field
wins, on import the first field valid for the item type wins.
"""

# CSL text variable -> item fields (priority order)
CSL_TEXT_MAPPINGS: dict[str, tuple[str, ...]] = {
    "title": ("title",),
    "container-title": ("publicationTitle", "reporter", "code"),
    "collection-title": ("seriesTitle", "series"),
    "collection-number": ("seriesNumber",),
    "publisher": ("publisher",),
    "publisher-place": ("place",),
    "authority": ("authority",),
    "page": ("pages",),
    "volume": ("volume", "codeNumber"),
    "issue": ("issue", "priorityNumbers"),
    "number-of-volumes": ("numberOfVolumes",),
    "number-of-pages": ("numPages",),
    "edition": ("edition",),
    "version": ("versionNumber",),
    "section": ("section", "committee"),
    "genre": ("type", "programmingLanguage"),
    "source": ("libraryCatalog",),
    "dimensions": ("artworkSize", "runningTime"),
    "medium": ("medium", "system"),
    "scale": ("scale",),
    "archive": ("archive",),
    "archive_location": ("archiveLocation",),
    "event": ("meetingName", "conferenceName"),
    "event-title": ("meetingName", "conferenceName"),
    "event-place": ("place",),
    "abstract": ("abstractNote",),
    "URL": ("url",),
    "DOI": ("DOI",),
    "ISBN": ("ISBN",),
    "ISSN": ("ISSN",),
    "call-number": ("callNumber",),
    "note": ("extra",),
    "number": ("number",),
    "chapter-number": ("session",),
    "references": ("history", "references"),
    "shortTitle": ("shortTitle",),
    "title-short": ("shortTitle",),
    "container-title-short": ("journalAbbreviation",),
    "language": ("language",),
    "status": ("legalStatus",),
    "jurisdiction": ("jurisdiction",),
    "license": ("rights",),
}

# Read on import, never written on export
CSL_IMPORT_ONLY_VARIABLES: frozenset[str] = frozenset({"shortTitle", "event-title"})

# CSL date variable -> item date fields (priority order)
CSL_DATE_MAPPINGS: dict[str, tuple[str, ...]] = {
    "issued": ("date",),
    "accessed": ("accessDate",),
    "submitted": ("filingDate",),
}

# Item creator type -> CSL name variable. Several creator types may fold
# onto one variable; on import the first one listed is used.
CSL_NAME_MAPPINGS: dict[str, str] = {
    "author": "author",
    "editor": "editor",
    "bookAuthor": "container-author",
    "composer": "composer",
    "director": "director",
    "interviewer": "interviewer",
    "recipient": "recipient",
    "reviewedAuthor": "reviewed-author",
    "seriesEditor": "collection-editor",
    "translator": "translator",
    "castMember": "performer",
    "performer": "performer",
}

# Item type -> CSL type. Not a bijection: reverse lookups take the first
# item type registered for a CSL type.
CSL_TYPE_MAPPINGS: dict[str, str] = {
    "artwork": "graphic",
    "audioRecording": "song",
    "bill": "bill",
    "blogPost": "post-weblog",
    "book": "book",
    "bookSection": "chapter",
    "case": "legal_case",
    "computerProgram": "book",
    "conferencePaper": "paper-conference",
    "dataset": "dataset",
    "dictionaryEntry": "entry-dictionary",
    "document": "document",
    "email": "personal_communication",
    "encyclopediaArticle": "entry-encyclopedia",
    "film": "motion_picture",
    "forumPost": "post",
    "hearing": "bill",
    "instantMessage": "personal_communication",
    "interview": "interview",
    "journalArticle": "article-journal",
    "letter": "personal_communication",
    "magazineArticle": "article-magazine",
    "manuscript": "manuscript",
    "map": "map",
    "newspaperArticle": "article-newspaper",
    "note": "document",
    "patent": "patent",
    "podcast": "song",
    "preprint": "article",
    "presentation": "speech",
    "radioBroadcast": "broadcast",
    "report": "report",
    "statute": "legislation",
    "thesis": "thesis",
    "tvBroadcast": "broadcast",
    "videoRecording": "motion_picture",
    "webpage": "webpage",
}

# Item types whose CSL record carries invariant content: (variable, value),
# applied in order after the generic conversion.
CSL_FORCE_FIELD_CONTENT: dict[str, tuple[tuple[str, str], ...]] = {
    "email": (("genre", "email"),),
    "instantMessage": (("genre", "instant message"),),
    "podcast": (("genre", "podcast"),),
    "radioBroadcast": (("genre", "radio broadcast"),),
    "tvBroadcast": (("genre", "television broadcast"),),
}

# Item types whose CSL record moves a variable to another slot:
# (variable, new variable), applied after forced content.
CSL_FORCE_REMAP: dict[str, tuple[tuple[str, str], ...]] = {
    "conferencePaper": (("event", "event-title"),),
    "presentation": (("event", "event-title"),),
}

# Item types whose jurisdiction is never defaulted on import
NO_DEFAULT_JURISDICTION_TYPES: frozenset[str] = frozenset(
    {"report", "newspaperArticle", "journalArticle"}
)

# Item types that carry no creators in CSL
NO_CREATOR_TYPES: frozenset[str] = frozenset({"attachment", "note"})

# Item fields whose legacy names are still accepted on export
LEGACY_FIELD_ALIASES: dict[str, str] = {"versionNumber": "version"}

# CSL variables recognized in "Key: value" lines of the extra field
EXTRA_CSL_FIELDS: frozenset[str] = frozenset(
    {
        "abstract",
        "accessed",
        "annote",
        "archive",
        "archive-place",
        "author",
        "authority",
        "call-number",
        "chapter-number",
        "citation-label",
        "citation-number",
        "collection-editor",
        "collection-number",
        "collection-title",
        "composer",
        "container",
        "container-author",
        "container-title",
        "container-title-short",
        "dimensions",
        "director",
        "edition",
        "editor",
        "editorial-director",
        "event",
        "event-date",
        "event-place",
        "first-reference-note-number",
        "genre",
        "illustrator",
        "interviewer",
        "issue",
        "issued",
        "jurisdiction",
        "keyword",
        "language",
        "locator",
        "medium",
        "note",
        "number",
        "number-of-pages",
        "number-of-volumes",
        "original-author",
        "original-date",
        "original-publisher",
        "original-publisher-place",
        "original-title",
        "page",
        "page-first",
        "publisher",
        "publisher-place",
        "recipient",
        "references",
        "reviewed-author",
        "reviewed-title",
        "scale",
        "section",
        "source",
        "status",
        "submitted",
        "title",
        "title-short",
        "translator",
        "type",
        "version",
        "volume",
        "year-suffix",
    }
)

# Extra keys written upper-case
EXTRA_UPPERCASE_FIELDS: frozenset[str] = frozenset({"doi", "isbn", "issn", "pmcid", "pmid", "url"})

# Extra keys whose CSL spelling differs from the hyphenated form
EXTRA_RENAMED_FIELDS: dict[str, str] = {"archive-location": "archive_location"}

# Item JSON keys that describe the stored record rather than the work
ITEM_METADATA_KEYS: frozenset[str] = frozenset(
    {
        "key",
        "version",
        "libraryID",
        "uri",
        "dateAdded",
        "dateModified",
        "collections",
        "relations",
        "parentItem",
        "deleted",
        "inPublications",
    }
)
