"""Extraction of unique molecular identifiers into read names."""

from .option_groups import UmiLocation

_NAME_ONLY_LOCATIONS = (UmiLocation.PER_INDEX, UmiLocation.PER_READ)


class UmiProcessor:
    """Moves a UMI from an index or the read start into the read name."""

    def __init__(self, options):
        self.options = options

    def _take_from_read(self, read):
        umi_opts = self.options.umi
        umi = read.seq[:min(len(read), umi_opts.length)]
        read.trim_front(len(umi) + umi_opts.skip)
        return umi

    def process(self, r1, r2=None):
        """Extract the UMI of a read (or pair) and tag the names in place."""
        umi_opts = self.options.umi
        if not umi_opts.enabled:
            return
        location = umi_opts.location
        umi = ""

        if location == UmiLocation.INDEX1:
            umi = r1.first_index()
        elif location == UmiLocation.INDEX2 and r2 is not None:
            umi = r2.last_index()
        elif location == UmiLocation.READ1:
            umi = self._take_from_read(r1)
        elif location == UmiLocation.READ2 and r2 is not None:
            umi = self._take_from_read(r2)
        elif location == UmiLocation.PER_INDEX:
            merged = r1.first_index()
            if r2 is not None:
                merged = merged + "_" + r2.last_index()
            self.add_umi_to_name(r1, merged)
            if r2 is not None:
                self.add_umi_to_name(r2, merged)
        elif location == UmiLocation.PER_READ:
            merged = self._take_from_read(r1)
            if r2 is not None:
                merged = merged + "_" + self._take_from_read(r2)
            self.add_umi_to_name(r1, merged)
            if r2 is not None:
                self.add_umi_to_name(r2, merged)

        if location not in _NAME_ONLY_LOCATIONS and umi:
            if r1 is not None:
                self.add_umi_to_name(r1, umi)
            if r2 is not None:
                self.add_umi_to_name(r2, umi)

    def add_umi_to_name(self, read, umi):
        """Insert the UMI tag before the first space of the name, or append it."""
        umi_opts = self.options.umi
        if umi_opts.prefix:
            tag = f"{umi_opts.delimiter}{umi_opts.prefix}_{umi}"
        else:
            tag = umi_opts.delimiter + umi
        space = read.name.find(" ")
        if space == -1:
            read.name += tag
        else:
            read.name = read.name[:space] + tag + read.name[space:]