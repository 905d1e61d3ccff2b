# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Raw NVML declarations for cffi (ABI mode).

Everything here mirrors nvml.h: names, struct layouts and buffer sizes.
Enum typedefs are declared as `unsigned int` (same size and ABI as the C
enums), handles as opaque struct pointers.

Exports:
- ffi: a cffi.FFI instance with the NVML API declared
- NVML_* constants used by the typed layer
"""

from cffi import FFI

ffi = FFI()

ffi.cdef(
    r"""
    typedef int nvmlReturn_t;
    typedef unsigned int nvmlEnableState_t;
    typedef unsigned int nvmlBrandType_t;
    typedef unsigned int nvmlDeviceArchitecture_t;
    typedef unsigned int nvmlTemperatureSensors_t;
    typedef unsigned int nvmlTemperatureThresholds_t;
    typedef unsigned int nvmlClockType_t;
    typedef unsigned int nvmlClockId_t;
    typedef unsigned int nvmlComputeMode_t;
    typedef unsigned int nvmlPstates_t;
    typedef unsigned int nvmlMemoryErrorType_t;
    typedef unsigned int nvmlEccCounterType_t;
    typedef unsigned int nvmlInforomObject_t;
    typedef unsigned int nvmlGpuOperationMode_t;
    typedef unsigned int nvmlRestrictedAPI_t;
    typedef unsigned int nvmlPcieUtilCounter_t;
    typedef unsigned int nvmlPageRetirementCause_t;
    typedef unsigned int nvmlLedColor_t;
    typedef unsigned int nvmlFanState_t;
    typedef unsigned int nvmlNvLinkCapability_t;
    typedef unsigned int nvmlNvLinkErrorCounter_t;
    typedef unsigned int nvmlVgpuCapability_t;
    typedef unsigned int nvmlVgpuTypeId_t;
    typedef unsigned int nvmlDriverModel_t;
    typedef unsigned int nvmlValueType_t;

    typedef struct nvmlDevice_st* nvmlDevice_t;
    typedef struct nvmlUnit_st* nvmlUnit_t;
    typedef struct nvmlEventSet_st* nvmlEventSet_t;

    typedef struct nvmlMemory_st {
        unsigned long long total;
        unsigned long long free;
        unsigned long long used;
    } nvmlMemory_t;

    typedef struct nvmlBAR1Memory_st {
        unsigned long long bar1Total;
        unsigned long long bar1Free;
        unsigned long long bar1Used;
    } nvmlBAR1Memory_t;

    typedef struct nvmlUtilization_st {
        unsigned int gpu;
        unsigned int memory;
    } nvmlUtilization_t;

    typedef struct nvmlPciInfo_st {
        char busIdLegacy[16];
        unsigned int domain;
        unsigned int bus;
        unsigned int device;
        unsigned int pciDeviceId;
        unsigned int pciSubSystemId;
        char busId[32];
    } nvmlPciInfo_t;

    typedef struct nvmlProcessInfo_st {
        unsigned int pid;
        unsigned long long usedGpuMemory;
        unsigned int gpuInstanceId;
        unsigned int computeInstanceId;
    } nvmlProcessInfo_t;

    typedef struct nvmlEventData_st {
        nvmlDevice_t device;
        unsigned long long eventType;
        unsigned long long eventData;
        unsigned int gpuInstanceId;
        unsigned int computeInstanceId;
    } nvmlEventData_t;

    typedef struct nvmlUnitInfo_st {
        char name[96];
        char id[96];
        char serial[96];
        char firmwareVersion[96];
    } nvmlUnitInfo_t;

    typedef struct nvmlLedState_st {
        char cause[256];
        nvmlLedColor_t color;
    } nvmlLedState_t;

    typedef struct nvmlPSUInfo_st {
        char state[256];
        unsigned int current;
        unsigned int voltage;
        unsigned int power;
    } nvmlPSUInfo_t;

    typedef struct nvmlUnitFanInfo_st {
        unsigned int speed;
        nvmlFanState_t state;
    } nvmlUnitFanInfo_t;

    typedef struct nvmlUnitFanSpeeds_st {
        nvmlUnitFanInfo_t fans[24];
        unsigned int count;
    } nvmlUnitFanSpeeds_t;

    typedef struct nvmlConfComputeSystemCaps_st {
        unsigned int cpuCaps;
        unsigned int gpusCaps;
    } nvmlConfComputeSystemCaps_t;

    typedef struct nvmlConfComputeGpuCertificate_st {
        unsigned int certChainSize;
        unsigned int attestationCertChainSize;
        unsigned char certChain[4096];
        unsigned char attestationCertChain[5120];
    } nvmlConfComputeGpuCertificate_t;

    typedef struct nvmlConfComputeGpuAttestationReport_st {
        unsigned int isCecAttestationReportPresent;
        unsigned int attestationReportSize;
        unsigned int cecAttestationReportSize;
        unsigned char nonce[32];
        unsigned char attestationReport[8192];
        unsigned char cecAttestationReport[4096];
    } nvmlConfComputeGpuAttestationReport_t;

    typedef union nvmlValue_st {
        double dVal;
        int siVal;
        unsigned int uiVal;
        unsigned long ulVal;
        unsigned long long ullVal;
        signed long long sllVal;
    } nvmlValue_t;

    typedef struct nvmlFieldValue_st {
        unsigned int fieldId;
        unsigned int scopeId;
        long long timestamp;
        long long latencyUsec;
        nvmlValueType_t valueType;
        nvmlReturn_t nvmlReturn;
        nvmlValue_t value;
    } nvmlFieldValue_t;

    /* Initialization and cleanup */
    nvmlReturn_t nvmlInit_v2(void);
    nvmlReturn_t nvmlInitWithFlags(unsigned int flags);
    nvmlReturn_t nvmlShutdown(void);
    const char* nvmlErrorString(nvmlReturn_t result);

    /* System queries */
    nvmlReturn_t nvmlSystemGetDriverVersion(char *version, unsigned int length);
    nvmlReturn_t nvmlSystemGetNVMLVersion(char *version, unsigned int length);
    nvmlReturn_t nvmlSystemGetCudaDriverVersion_v2(int *cudaDriverVersion);
    nvmlReturn_t nvmlSystemGetProcessName(unsigned int pid, char *name, unsigned int length);
    nvmlReturn_t nvmlSystemGetConfComputeCapabilities(nvmlConfComputeSystemCaps_t *capabilities);

    /* Device handles */
    nvmlReturn_t nvmlDeviceGetCount_v2(unsigned int *deviceCount);
    nvmlReturn_t nvmlDeviceGetHandleByIndex_v2(unsigned int index, nvmlDevice_t *device);
    nvmlReturn_t nvmlDeviceGetHandleByUUID(const char *uuid, nvmlDevice_t *device);
    nvmlReturn_t nvmlDeviceGetHandleByPciBusId_v2(const char *pciBusId, nvmlDevice_t *device);
    nvmlReturn_t nvmlDeviceGetHandleBySerial(const char *serial, nvmlDevice_t *device);

    /* Device identity */
    nvmlReturn_t nvmlDeviceGetName(nvmlDevice_t device, char *name, unsigned int length);
    nvmlReturn_t nvmlDeviceGetUUID(nvmlDevice_t device, char *uuid, unsigned int length);
    nvmlReturn_t nvmlDeviceGetSerial(nvmlDevice_t device, char *serial, unsigned int length);
    nvmlReturn_t nvmlDeviceGetIndex(nvmlDevice_t device, unsigned int *index);
    nvmlReturn_t nvmlDeviceGetMinorNumber(nvmlDevice_t device, unsigned int *minorNumber);
    nvmlReturn_t nvmlDeviceGetBrand(nvmlDevice_t device, nvmlBrandType_t *type);
    nvmlReturn_t nvmlDeviceGetArchitecture(nvmlDevice_t device, nvmlDeviceArchitecture_t *arch);
    nvmlReturn_t nvmlDeviceGetCudaComputeCapability(nvmlDevice_t device, int *major, int *minor);
    nvmlReturn_t nvmlDeviceGetBoardId(nvmlDevice_t device, unsigned int *boardId);
    nvmlReturn_t nvmlDeviceGetMultiGpuBoard(nvmlDevice_t device, unsigned int *multiGpuBool);
    nvmlReturn_t nvmlDeviceGetVbiosVersion(nvmlDevice_t device, char *version, unsigned int length);
    nvmlReturn_t nvmlDeviceGetInforomVersion(nvmlDevice_t device, nvmlInforomObject_t object,
                                             char *version, unsigned int length);
    nvmlReturn_t nvmlDeviceGetInforomImageVersion(nvmlDevice_t device, char *version,
                                                  unsigned int length);
    nvmlReturn_t nvmlDeviceGetPciInfo_v3(nvmlDevice_t device, nvmlPciInfo_t *pci);
    nvmlReturn_t nvmlDeviceOnSameBoard(nvmlDevice_t device1, nvmlDevice_t device2,
                                       int *onSameBoard);

    /* Thermal and power */
    nvmlReturn_t nvmlDeviceGetTemperature(nvmlDevice_t device, nvmlTemperatureSensors_t sensorType,
                                          unsigned int *temp);
    nvmlReturn_t nvmlDeviceGetTemperatureThreshold(nvmlDevice_t device,
                                                   nvmlTemperatureThresholds_t thresholdType,
                                                   unsigned int *temp);
    nvmlReturn_t nvmlDeviceGetPowerUsage(nvmlDevice_t device, unsigned int *power);
    nvmlReturn_t nvmlDeviceGetPowerManagementLimit(nvmlDevice_t device, unsigned int *limit);
    nvmlReturn_t nvmlDeviceGetPowerManagementDefaultLimit(nvmlDevice_t device,
                                                          unsigned int *defaultLimit);
    nvmlReturn_t nvmlDeviceGetPowerManagementLimitConstraints(nvmlDevice_t device,
                                                              unsigned int *minLimit,
                                                              unsigned int *maxLimit);
    nvmlReturn_t nvmlDeviceGetEnforcedPowerLimit(nvmlDevice_t device, unsigned int *limit);
    nvmlReturn_t nvmlDeviceSetPowerManagementLimit(nvmlDevice_t device, unsigned int limit);
    nvmlReturn_t nvmlDeviceGetTotalEnergyConsumption(nvmlDevice_t device,
                                                     unsigned long long *energy);
    nvmlReturn_t nvmlDeviceGetFanSpeed_v2(nvmlDevice_t device, unsigned int fan,
                                          unsigned int *speed);
    nvmlReturn_t nvmlDeviceGetNumFans(nvmlDevice_t device, unsigned int *numFans);

    /* Memory and utilization */
    nvmlReturn_t nvmlDeviceGetMemoryInfo(nvmlDevice_t device, nvmlMemory_t *memory);
    nvmlReturn_t nvmlDeviceGetBAR1MemoryInfo(nvmlDevice_t device, nvmlBAR1Memory_t *bar1Memory);
    nvmlReturn_t nvmlDeviceGetUtilizationRates(nvmlDevice_t device, nvmlUtilization_t *utilization);
    nvmlReturn_t nvmlDeviceGetEncoderUtilization(nvmlDevice_t device, unsigned int *utilization,
                                                 unsigned int *samplingPeriodUs);
    nvmlReturn_t nvmlDeviceGetDecoderUtilization(nvmlDevice_t device, unsigned int *utilization,
                                                 unsigned int *samplingPeriodUs);
    nvmlReturn_t nvmlDeviceGetEncoderStats(nvmlDevice_t device, unsigned int *sessionCount,
                                           unsigned int *averageFps, unsigned int *averageLatency);
    nvmlReturn_t nvmlDeviceGetPcieThroughput(nvmlDevice_t device, nvmlPcieUtilCounter_t counter,
                                             unsigned int *value);
    nvmlReturn_t nvmlDeviceGetCurrPcieLinkGeneration(nvmlDevice_t device, unsigned int *currLinkGen);
    nvmlReturn_t nvmlDeviceGetCurrPcieLinkWidth(nvmlDevice_t device, unsigned int *currLinkWidth);
    nvmlReturn_t nvmlDeviceGetMaxPcieLinkGeneration(nvmlDevice_t device, unsigned int *maxLinkGen);
    nvmlReturn_t nvmlDeviceGetMaxPcieLinkWidth(nvmlDevice_t device, unsigned int *maxLinkWidth);

    /* Clocks and performance */
    nvmlReturn_t nvmlDeviceGetClockInfo(nvmlDevice_t device, nvmlClockType_t type,
                                        unsigned int *clock);
    nvmlReturn_t nvmlDeviceGetMaxClockInfo(nvmlDevice_t device, nvmlClockType_t type,
                                           unsigned int *clock);
    nvmlReturn_t nvmlDeviceGetClock(nvmlDevice_t device, nvmlClockType_t clockType,
                                    nvmlClockId_t clockId, unsigned int *clockMHz);
    nvmlReturn_t nvmlDeviceSetApplicationsClocks(nvmlDevice_t device, unsigned int memClockMHz,
                                                 unsigned int graphicsClockMHz);
    nvmlReturn_t nvmlDeviceResetApplicationsClocks(nvmlDevice_t device);
    nvmlReturn_t nvmlDeviceGetPerformanceState(nvmlDevice_t device, nvmlPstates_t *pState);
    nvmlReturn_t nvmlDeviceGetCurrentClocksThrottleReasons(nvmlDevice_t device,
                                                           unsigned long long *clocksThrottleReasons);
    nvmlReturn_t nvmlDeviceGetSupportedClocksThrottleReasons(nvmlDevice_t device,
                                                             unsigned long long *supportedClocksThrottleReasons);
    nvmlReturn_t nvmlDeviceGetAutoBoostedClocksEnabled(nvmlDevice_t device,
                                                       nvmlEnableState_t *isEnabled,
                                                       nvmlEnableState_t *defaultIsEnabled);

    /* Modes */
    nvmlReturn_t nvmlDeviceGetComputeMode(nvmlDevice_t device, nvmlComputeMode_t *mode);
    nvmlReturn_t nvmlDeviceSetComputeMode(nvmlDevice_t device, nvmlComputeMode_t mode);
    nvmlReturn_t nvmlDeviceGetPersistenceMode(nvmlDevice_t device, nvmlEnableState_t *mode);
    nvmlReturn_t nvmlDeviceSetPersistenceMode(nvmlDevice_t device, nvmlEnableState_t mode);
    nvmlReturn_t nvmlDeviceGetDisplayMode(nvmlDevice_t device, nvmlEnableState_t *display);
    nvmlReturn_t nvmlDeviceGetDisplayActive(nvmlDevice_t device, nvmlEnableState_t *isActive);
    nvmlReturn_t nvmlDeviceGetAPIRestriction(nvmlDevice_t device, nvmlRestrictedAPI_t apiType,
                                             nvmlEnableState_t *isRestricted);
    nvmlReturn_t nvmlDeviceGetGpuOperationMode(nvmlDevice_t device, nvmlGpuOperationMode_t *current,
                                               nvmlGpuOperationMode_t *pending);
    nvmlReturn_t nvmlDeviceGetEccMode(nvmlDevice_t device, nvmlEnableState_t *current,
                                      nvmlEnableState_t *pending);
    nvmlReturn_t nvmlDeviceSetEccMode(nvmlDevice_t device, nvmlEnableState_t ecc);
    nvmlReturn_t nvmlDeviceGetTotalEccErrors(nvmlDevice_t device, nvmlMemoryErrorType_t errorType,
                                             nvmlEccCounterType_t counterType,
                                             unsigned long long *eccCounts);
    nvmlReturn_t nvmlDeviceClearEccErrorCounts(nvmlDevice_t device, nvmlEccCounterType_t counterType);
    nvmlReturn_t nvmlDeviceGetRetiredPages_v2(nvmlDevice_t device, nvmlPageRetirementCause_t cause,
                                              unsigned int *pageCount, unsigned long long *addresses,
                                              unsigned long long *timestamps);
    nvmlReturn_t nvmlDeviceGetDriverModel(nvmlDevice_t device, nvmlDriverModel_t *current,
                                          nvmlDriverModel_t *pending);
    nvmlReturn_t nvmlDeviceGetFieldValues(nvmlDevice_t device, int valuesCount,
                                          nvmlFieldValue_t *values);

    /* Processes */
    nvmlReturn_t nvmlDeviceGetComputeRunningProcesses_v3(nvmlDevice_t device, unsigned int *infoCount,
                                                         nvmlProcessInfo_t *infos);
    nvmlReturn_t nvmlDeviceGetGraphicsRunningProcesses_v3(nvmlDevice_t device, unsigned int *infoCount,
                                                          nvmlProcessInfo_t *infos);

    /* Events */
    nvmlReturn_t nvmlEventSetCreate(nvmlEventSet_t *set);
    nvmlReturn_t nvmlEventSetFree(nvmlEventSet_t set);
    nvmlReturn_t nvmlEventSetWait_v2(nvmlEventSet_t set, nvmlEventData_t *data,
                                     unsigned int timeoutms);
    nvmlReturn_t nvmlDeviceRegisterEvents(nvmlDevice_t device, unsigned long long eventTypes,
                                          nvmlEventSet_t set);
    nvmlReturn_t nvmlDeviceGetSupportedEventTypes(nvmlDevice_t device,
                                                  unsigned long long *eventTypes);

    /* Units */
    nvmlReturn_t nvmlUnitGetCount(unsigned int *unitCount);
    nvmlReturn_t nvmlUnitGetHandleByIndex(unsigned int index, nvmlUnit_t *unit);
    nvmlReturn_t nvmlUnitGetUnitInfo(nvmlUnit_t unit, nvmlUnitInfo_t *info);
    nvmlReturn_t nvmlUnitGetLedState(nvmlUnit_t unit, nvmlLedState_t *state);
    nvmlReturn_t nvmlUnitSetLedState(nvmlUnit_t unit, nvmlLedColor_t color);
    nvmlReturn_t nvmlUnitGetPsuInfo(nvmlUnit_t unit, nvmlPSUInfo_t *psu);
    nvmlReturn_t nvmlUnitGetTemperature(nvmlUnit_t unit, unsigned int type, unsigned int *temp);
    nvmlReturn_t nvmlUnitGetFanSpeedInfo(nvmlUnit_t unit, nvmlUnitFanSpeeds_t *fanSpeeds);
    nvmlReturn_t nvmlUnitGetDevices(nvmlUnit_t unit, unsigned int *deviceCount,
                                    nvmlDevice_t *devices);

    /* NvLink */
    nvmlReturn_t nvmlDeviceGetNvLinkState(nvmlDevice_t device, unsigned int link,
                                          nvmlEnableState_t *isActive);
    nvmlReturn_t nvmlDeviceGetNvLinkVersion(nvmlDevice_t device, unsigned int link,
                                            unsigned int *version);
    nvmlReturn_t nvmlDeviceGetNvLinkCapability(nvmlDevice_t device, unsigned int link,
                                               nvmlNvLinkCapability_t capability,
                                               unsigned int *capResult);
    nvmlReturn_t nvmlDeviceGetNvLinkRemotePciInfo_v2(nvmlDevice_t device, unsigned int link,
                                                     nvmlPciInfo_t *pci);
    nvmlReturn_t nvmlDeviceGetNvLinkErrorCounter(nvmlDevice_t device, unsigned int link,
                                                 nvmlNvLinkErrorCounter_t counter,
                                                 unsigned long long *counterValue);
    nvmlReturn_t nvmlDeviceResetNvLinkErrorCounters(nvmlDevice_t device, unsigned int link);

    /* vGPU */
    nvmlReturn_t nvmlDeviceGetSupportedVgpus(nvmlDevice_t device, unsigned int *vgpuCount,
                                             nvmlVgpuTypeId_t *vgpuTypeIds);
    nvmlReturn_t nvmlDeviceGetCreatableVgpus(nvmlDevice_t device, unsigned int *vgpuCount,
                                             nvmlVgpuTypeId_t *vgpuTypeIds);
    nvmlReturn_t nvmlVgpuTypeGetClass(nvmlVgpuTypeId_t vgpuTypeId, char *vgpuTypeClass,
                                      unsigned int *size);
    nvmlReturn_t nvmlVgpuTypeGetName(nvmlVgpuTypeId_t vgpuTypeId, char *vgpuTypeName,
                                     unsigned int *size);
    nvmlReturn_t nvmlVgpuTypeGetLicense(nvmlVgpuTypeId_t vgpuTypeId, char *vgpuTypeLicenseString,
                                        unsigned int size);
    nvmlReturn_t nvmlVgpuTypeGetCapabilities(nvmlVgpuTypeId_t vgpuTypeId,
                                             nvmlVgpuCapability_t capability,
                                             unsigned int *capResult);
    nvmlReturn_t nvmlVgpuTypeGetDeviceID(nvmlVgpuTypeId_t vgpuTypeId, unsigned long long *deviceID,
                                         unsigned long long *subsystemID);
    nvmlReturn_t nvmlVgpuTypeGetFrameRateLimit(nvmlVgpuTypeId_t vgpuTypeId,
                                               unsigned int *frameRateLimit);
    nvmlReturn_t nvmlVgpuTypeGetFramebufferSize(nvmlVgpuTypeId_t vgpuTypeId,
                                                unsigned long long *fbSize);
    nvmlReturn_t nvmlVgpuTypeGetGpuInstanceProfileId(nvmlVgpuTypeId_t vgpuTypeId,
                                                     unsigned int *gpuInstanceProfileId);
    nvmlReturn_t nvmlVgpuTypeGetMaxInstances(nvmlDevice_t device, nvmlVgpuTypeId_t vgpuTypeId,
                                             unsigned int *vgpuInstanceCount);
    nvmlReturn_t nvmlVgpuTypeGetMaxInstancesPerVm(nvmlVgpuTypeId_t vgpuTypeId,
                                                  unsigned int *vgpuInstanceCountPerVm);
    nvmlReturn_t nvmlVgpuTypeGetNumDisplayHeads(nvmlVgpuTypeId_t vgpuTypeId,
                                                unsigned int *numDisplayHeads);
    nvmlReturn_t nvmlVgpuTypeGetResolution(nvmlVgpuTypeId_t vgpuTypeId, unsigned int displayIndex,
                                           unsigned int *xdim, unsigned int *ydim);

    /* Confidential compute */
    nvmlReturn_t nvmlDeviceGetConfComputeGpuCertificate(nvmlDevice_t device,
                                                        nvmlConfComputeGpuCertificate_t *gpuCert);
    nvmlReturn_t nvmlDeviceGetConfComputeGpuAttestationReport(nvmlDevice_t device,
                                                              nvmlConfComputeGpuAttestationReport_t *gpuAtstReport);
    """
)

# Return codes
NVML_SUCCESS = 0
NVML_ERROR_INSUFFICIENT_SIZE = 7
NVML_ERROR_TIMEOUT = 10

# Buffer sizes (nvml.h)
NVML_DEVICE_NAME_BUFFER_SIZE = 64
NVML_DEVICE_NAME_V2_BUFFER_SIZE = 96
NVML_DEVICE_UUID_V2_BUFFER_SIZE = 96
NVML_DEVICE_SERIAL_BUFFER_SIZE = 30
NVML_DEVICE_VBIOS_VERSION_BUFFER_SIZE = 32
NVML_DEVICE_INFOROM_VERSION_BUFFER_SIZE = 16
NVML_DEVICE_PCI_BUS_ID_BUFFER_SIZE = 32
NVML_SYSTEM_DRIVER_VERSION_BUFFER_SIZE = 80
NVML_SYSTEM_NVML_VERSION_BUFFER_SIZE = 80
NVML_GRID_LICENSE_BUFFER_SIZE = 128

NVML_UNIT_MAX_FANS = 24
NVML_GPU_CERT_CHAIN_SIZE = 0x1000
NVML_GPU_ATTESTATION_CERT_CHAIN_SIZE = 0x1400
NVML_CC_GPU_ATTESTATION_REPORT_SIZE = 0x2000
NVML_CC_GPU_CEC_ATTESTATION_REPORT_SIZE = 0x1000
NVML_CC_GPU_ATTESTATION_NONCE_SIZE = 0x20

# Sentinels
NVML_VALUE_NOT_AVAILABLE_ULL = 0xFFFFFFFFFFFFFFFF
NVML_INSTANCE_ID_NOT_APPLICABLE = 0xFFFFFFFF
NVML_UINT_MAX = 0xFFFFFFFF

# Field ids for Device.field_values() (NVML_FI_DEV_*)
NVML_FI_DEV_ECC_CURRENT = 1
NVML_FI_DEV_ECC_PENDING = 2
NVML_FI_DEV_ECC_SBE_VOL_TOTAL = 3
NVML_FI_DEV_ECC_DBE_VOL_TOTAL = 4
NVML_FI_DEV_ECC_SBE_AGG_TOTAL = 5
NVML_FI_DEV_ECC_DBE_AGG_TOTAL = 6
NVML_FI_DEV_RETIRED_SBE = 30
NVML_FI_DEV_RETIRED_DBE = 31
NVML_FI_DEV_RETIRED_PENDING = 32
NVML_FI_DEV_MEMORY_TEMP = 82
NVML_FI_DEV_TOTAL_ENERGY_CONSUMPTION = 83
NVML_FI_DEV_NVLINK_LINK_COUNT = 91
NVML_FI_DEV_PCIE_REPLAY_COUNTER = 94
