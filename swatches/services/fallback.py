"""Complete a partial attribute selection into a full filter map."""
from swatches.services.attribute_service import COLLECTION_TYPES, OptionLookup


class AttributeFallbackMerger:
    """Fill in the configurable attributes a caller left unspecified.

    Two policies exist:

    - store: an unspecified attribute falls back to its default value.
    - index: an unspecified attribute accepts any of its option ids. The
      index snapshot already limits candidates to the parent's children.

    In both cases labels of option-coded attributes are translated to option
    ids. A label with no matching option is passed through untouched and will
    simply match nothing downstream.
    """

    def __init__(self, option_lookup=None):
        self.option_lookup = option_lookup or OptionLookup()

    def store_filters(self, attributes, selection):
        fallback = {attr.code: attr.default_value for attr in attributes}
        return self._merge(attributes, selection, fallback)

    def index_filters(self, attributes, selection):
        # An attribute without options has no domain to restrict to
        fallback = {attr.code: attr.option_ids for attr in attributes if attr.option_ids}
        return self._merge(attributes, selection, fallback)

    def _merge(self, attributes, selection, fallback):
        selected = dict(selection or {})

        for attribute in attributes:
            code = attribute.code
            if code in selected and attribute.uses_source:
                selected[code] = self._translate(attribute, selected[code])

        # Selection wins; fallback only covers what the caller left out.
        merged = dict(selected)
        for code, values in fallback.items():
            merged.setdefault(code, values)
        return merged

    def _translate(self, attribute, value):
        if not isinstance(value, COLLECTION_TYPES):
            option_ids = self.option_lookup.resolve(attribute, value)
            if not option_ids:
                return value
            return option_ids[0] if len(option_ids) == 1 else option_ids

        translated = []
        for item in value:
            option_ids = self.option_lookup.resolve(attribute, item)
            if option_ids:
                translated.extend(option_ids)
            else:
                translated.append(item)
        return translated
