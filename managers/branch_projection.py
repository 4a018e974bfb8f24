TYPE_FILTERS = ("All", "Main", "Sub")


def registry_stats(records):
    return {
        'total': len(records),
        'main': sum(1 for r in records if r.get('type') == "Main"),
        'sub': sum(1 for r in records if r.get('type') == "Sub"),
        'active': sum(1 for r in records if r.get('status') == "Active"),
        'inactive': sum(1 for r in records if r.get('status') == "Inactive"),
    }


def matches_search(record, search):
    if not search:
        return True
    needle = search.lower()
    name = record.get('branchName') or ""
    code = record.get('branchCode') or ""
    return needle in name.lower() or needle in code.lower()


def matches_type(record, type_filter):
    return not type_filter or type_filter == "All" or record.get('type') == type_filter


def project_registry(records, search: str = "", type_filter: str = "All") -> dict:
    """
    Derives everything the registry screen shows from one snapshot of records.
    Counts cover the whole snapshot; `branches` is the search/type filtered
    subsequence in snapshot order. The search term is used exactly as typed,
    surrounding spaces included. Recomputed from scratch on every call.
    """
    records = list(records or [])
    search = search or ""
    return {
        'stats': registry_stats(records),
        'branches': [
            r for r in records
            if matches_search(r, search) and matches_type(r, type_filter)
        ],
    }


def to_table_rows(branches):
    """Display rows for the registry table."""
    return [
        {
            "Tên chi nhánh": b.get('branchName', ''),
            "Mã": b.get('branchCode', ''),
            "Địa chỉ": b.get('address', ''),
            "Loại": b.get('type', ''),
            "Trạng thái": b.get('status', ''),
        }
        for b in branches
    ]
