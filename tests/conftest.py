"""Shared smartctl sample outputs and a fake command runner."""

from __future__ import annotations

import pytest

from smartdiag.config import SmartctlConfig
from smartdiag.engine import SmartInformation
from smartdiag.executor import ExecutionGate
from smartdiag.models import CommandOutput, Device

# smartctl -A -f brief -i -H -l selftest on a SATA disk
ATA_OUTPUT = """\
smartctl 7.3 2022-02-28 r5338 [x86_64-linux-6.1.0-18-amd64] (local build)
Copyright (C) 2002-22, Bruce Allen, Christian Franke, www.smartmontools.org

=== START OF INFORMATION SECTION ===
Model Family:     Western Digital Red
Device Model:     WDC WD40EFRX-68N32N0
Serial Number:    WD-WCC7K1234567
LU WWN Device Id: 5 0014ee 2b8a12345
Firmware Version: 82.00A82
User Capacity:    4,000,787,030,016 bytes [4.00 TB]
Sector Sizes:     512 bytes logical, 4096 bytes physical
Rotation Rate:    5400 rpm
Device is:        In smartctl database [for details use: -P show]
Local Time is:    Sat Oct 17 10:00:00 2026 UTC
SMART support is: Available - device has SMART capability.
SMART support is: Enabled
Power mode is:    ACTIVE or IDLE

=== START OF READ SMART DATA SECTION ===
SMART overall-health self-assessment test result: PASSED

SMART Attributes Data Structure revision number: 16
Vendor Specific SMART Attributes with Thresholds:
ID# ATTRIBUTE_NAME          FLAGS    VALUE WORST THRESH FAIL RAW_VALUE
  1 Raw_Read_Error_Rate     POSR-K   200   200   051    -    0
  3 Spin_Up_Time            POS--K   172   170   021    -    6383
  4 Start_Stop_Count        -O--CK   100   100   000    -    512
  5 Reallocated_Sector_Ct   PO--CK   200   200   140    -    0
  7 Seek_Error_Rate         -OSR-K   200   200   000    -    0
  9 Power_On_Hours          -O--CK   070   070   000    -    22345
 10 Spin_Retry_Count        -O--CK   100   100   000    -    0
 12 Power_Cycle_Count       -O--CK   100   100   000    -    98
193 Load_Cycle_Count        -O--CK   195   195   000    -    17402
194 Temperature_Celsius     -O---K   115   103   000    -    35 (Min/Max 18/47)
196 Reallocated_Event_Count -O--CK   200   200   000    -    0
197 Current_Pending_Sector  -O--CK   200   200   000    -    0
198 Offline_Uncorrectable   ----CK   100   253   000    -    0
199 UDMA_CRC_Error_Count    -O--CK   200   200   000    -    0
                            ||||||_ K auto-keep
                            |||||__ C event count
                            ||||___ R error rate
                            |||____ S speed/performance
                            ||_____ O updated online
                            |______ P prefailure warning

SMART Self-test log structure revision number 1
Num  Test_Description    Status                  Remaining  LifeTime(hours)  LBA_of_first_error
# 1  Short offline       Completed without error       00%     22300         -
# 2  Extended offline    Completed: read failure       90%       670         57217755
"""

# Same command on an NVMe SSD
NVME_OUTPUT = """\
smartctl 7.3 2022-02-28 r5338 [x86_64-linux-6.1.0-18-amd64] (local build)
Copyright (C) 2002-22, Bruce Allen, Christian Franke, www.smartmontools.org

=== START OF INFORMATION SECTION ===
Model Number:                       Samsung SSD 970 EVO Plus 1TB
Serial Number:                      S4EWNX0R123456
Firmware Version:                   2B2QEXM7
PCI Vendor/Subsystem ID:            0x144d
Total NVM Capacity:                 1,000,204,886,016 [1.00 TB]
Namespace 1 Size/Capacity:          1,000,204,886,016 [1.00 TB]
Local Time is:                      Sat Oct 17 10:00:00 2026 UTC

=== START OF SMART DATA SECTION ===
SMART overall-health self-assessment test result: PASSED

SMART/Health Information (NVMe Log 0x02)
Critical Warning:                   0x00
Temperature:                        38 Celsius
Available Spare:                    100%
Available Spare Threshold:          10%
Percentage Used:                    2%
Power Cycles:                       1,234
Power On Hours:                     8,765
Media and Data Integrity Errors:    0
Warning  Comp. Temperature Time:    0
Temperature Sensor 1:               38 Celsius
"""

# Same command on a SAS disk
SAS_OUTPUT = """\
smartctl 7.3 2022-02-28 r5338 [x86_64-linux-6.1.0-18-amd64] (local build)
Copyright (C) 2002-22, Bruce Allen, Christian Franke, www.smartmontools.org

=== START OF INFORMATION SECTION ===
Vendor:               SEAGATE
Product:              ST4000NM0023
Revision:             0004
User Capacity:        4,000,787,030,016 bytes [4.00 TB]
Logical block size:   512 bytes
Serial number:        Z1Z12345
Device type:          disk
Transport protocol:   SAS (SPL-3)
SMART support is:     Available - device has SMART capability.
SMART support is:     Enabled

=== START OF READ SMART DATA SECTION ===
SMART Health Status: OK

Current Drive Temperature:     31 C
Drive Trip Temperature:        68 C
Elements in grown defect list: 0
"""

STANDBY_OUTPUT = """\
smartctl 7.3 2022-02-28 r5338 [x86_64-linux-6.1.0-18-amd64] (local build)
Copyright (C) 2002-22, Bruce Allen, Christian Franke, www.smartmontools.org

Device is in STANDBY mode, exit(0)
"""

OPEN_FAILED_OUTPUT = """\
smartctl 7.3 2022-02-28 r5338 [x86_64-linux-6.1.0-18-amd64] (local build)
Copyright (C) 2002-22, Bruce Allen, Christian Franke, www.smartmontools.org

Smartctl open device: /dev/sdz failed: No such device
"""


class FakeRunner:
    """Stands in for smartctl, recording every command it receives."""

    def __init__(self, output: str, exit_status: int = 0):
        self.output = output
        self.exit_status = exit_status
        self.commands: list[list[str]] = []

    def __call__(self, command: list[str]) -> CommandOutput:
        self.commands.append(command)
        return CommandOutput(
            command=command,
            exit_status=self.exit_status,
            lines=self.output.splitlines(),
        )


@pytest.fixture
def make_engine():
    """Factory for engines backed by a FakeRunner and a private gate."""

    def factory(
        output: str,
        exit_status: int = 0,
        path: str = "/dev/sda",
        type_hint: str | None = None,
        size_bytes: int | None = 4_000_787_030_016,
        config: SmartctlConfig | None = None,
    ) -> tuple[SmartInformation, FakeRunner]:
        runner = FakeRunner(output, exit_status)
        engine = SmartInformation(
            Device(path=path, type_hint=type_hint, size_bytes=size_bytes),
            config=config,
            runner=runner,
            gate=ExecutionGate(),
        )
        return engine, runner

    return factory
