"""Documentation lookup and keyword ranking."""

from .keywords import combine_keywords, extract_keywords_from_path, normalize_keywords
from .library import DirListing, DocLookup, DocsLibrary, DocsNotFoundError
from .ranker import MatchScore, get_matching_paths, rank_documents, search_document_content
from .walker import DOC_EXTENSIONS, FileListingCache, walk_doc_files

__all__ = [
	"DOC_EXTENSIONS",
	"DirListing",
	"DocLookup",
	"DocsLibrary",
	"DocsNotFoundError",
	"FileListingCache",
	"MatchScore",
	"combine_keywords",
	"extract_keywords_from_path",
	"get_matching_paths",
	"normalize_keywords",
	"rank_documents",
	"search_document_content",
	"walk_doc_files",
]
