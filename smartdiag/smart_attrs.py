"""Static descriptions of well-known ATA SMART attribute ids."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Descriptions follow the common smartmontools naming; vendor-specific
# meanings of the raw values are not interpreted here.
ATTRIBUTE_DESCRIPTIONS: Mapping[int, str] = MappingProxyType({
    1: "Frequency of errors while reading raw data from the disk",
    2: "Average efficiency of the disk",
    3: "Time needed to spin up the disk",
    4: "Number of spindle start/stop cycles",
    5: "Number of remapped sectors",
    6: "Margin of a channel while reading data",
    7: "Frequency of errors while positioning",
    8: "Average efficiency of operations while positioning",
    9: "Number of hours elapsed in the power-on state",
    10: "Number of retry attempts to spin up",
    11: "Number of attempts to calibrate the device",
    12: "Number of power-on events",
    13: "Frequency of 'program' errors while reading from the disk",
    100: "Erase/program cycles of the flash cells",
    160: "Uncorrectable sectors found during reads",
    161: "Number of valid spare blocks",
    163: "Number of initial invalid blocks",
    164: "Total erase count",
    165: "Maximum erase count",
    166: "Minimum erase count",
    167: "Average erase count",
    168: "SATA PHY error count",
    169: "Remaining life of the flash",
    170: "Number of reserved blocks available",
    171: "Number of flash program operation failures",
    172: "Number of flash erase operation failures",
    173: "Wear leveling count",
    174: "Number of unexpected power loss events",
    175: "Program fail count for the worst die",
    176: "Erase fail count for the worst die",
    177: "Maximum number of erase operations on a single block",
    178: "Number of reserved blocks used",
    179: "Total number of reserved blocks used",
    180: "Number of reserved blocks left unused",
    181: "Total program fail count",
    182: "Total erase fail count",
    183: "Number of downshifts of the SATA link speed",
    184: "Parity errors in the data path through the drive cache",
    187: "Number of errors that could not be recovered using hardware ECC",
    188: "Number of aborted operations due to device timeout",
    189: "Number of times the recording head was flying outside its normal range",
    190: "Temperature of the air flowing across the disk",
    191: "Frequency of mistakes as a result of impact loads",
    192: "Number of power-off or emergency retract cycles",
    193: "Number of cycles into the landing zone position",
    194: "Current internal temperature",
    195: "Number of ECC on-the-fly errors",
    196: "Number of remapping operations",
    197: "Number of unstable sectors waiting for remapping",
    198: "Number of uncorrectable errors when reading or writing a sector",
    199: "Number of CRC errors during UDMA mode",
    200: "Number of errors found when writing a sector",
    201: "Number of off-track errors",
    202: "Number of data address mark errors",
    203: "Number of ECC errors",
    204: "Number of errors corrected by software ECC",
    205: "Number of errors due to high temperature",
    206: "Height of heads above the disk surface",
    207: "Amount of high current used to spin up the drive",
    208: "Number of buzz routines needed to spin up the drive",
    209: "Drive seek performance during offline operations",
    210: "Vibration detected during writes",
    211: "Vibration encountered during writes",
    212: "Shock encountered during writes",
    220: "Distance the disk has shifted relative to the spindle",
    221: "Number of errors resulting from externally-induced shock and vibration",
    222: "Time spent operating under data load",
    223: "Number of times the head changes position",
    224: "Resistance caused by friction in mechanical parts while operating",
    225: "Total number of load cycles",
    226: "Total time of loading on the magnetic heads actuator",
    227: "Number of attempts to compensate for platter speed variations",
    228: "Number of power-off retract events",
    230: "Amplitude of heads trembling in running mode",
    231: "Temperature of the drive or remaining SSD life",
    232: "Number of physical erase cycles completed or available reserved space",
    233: "Media wearout indicator",
    234: "Average erase count of all blocks",
    235: "Number of good blocks or power failure backup events",
    240: "Time spent during the positioning of the drive heads",
    241: "Total number of LBAs written",
    242: "Total number of LBAs read",
    249: "Total NAND writes in GiB",
    250: "Number of errors while reading from a disk",
    251: "Number of remaining spare blocks as a percentage of the total",
    252: "Number of times the newly added defect list was reset",
    253: "Number of spare blocks remaining",
    254: "Number of free fall events detected",
})


def describe(attr_id: int) -> str:
    """Return the description of an attribute id, or '' if unknown."""
    return ATTRIBUTE_DESCRIPTIONS.get(attr_id, "")
