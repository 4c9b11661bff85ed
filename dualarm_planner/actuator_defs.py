"""Status codes, modes, attribute ids and protocol directives of the joint actuators."""

from __future__ import annotations

from enum import IntEnum


class ConnectStatus(IntEnum):
    """Connection state of the CAN link and of the actuators."""

    NO_CONNECT = 0x00
    CAN_CONNECTED = 0x02
    ACTUATOR_CONNECTED = 0x04


class ChannelId(IntEnum):
    """Index of a chart data channel."""

    CHANNEL_1 = 0
    CHANNEL_2 = 1
    CHANNEL_3 = 2
    CHANNEL_4 = 3
    CHANNEL_CNT = 4


class ErrorCode(IntEnum):
    """Actuator and connection error codes.

    Codes up to ``CODER_DISABLED`` are single bits that an actuator may report
    together; the codes above it are whole values.
    """

    NONE = 0x000
    ACTUATOR_OVERVOLTAGE = 0x001
    ACTUATOR_UNDERVOLTAGE = 0x002
    ACTUATOR_LOCKED_ROTOR = 0x004
    ACTUATOR_OVERHEATING = 0x008
    ACTUATOR_READ_OR_WRITE = 0x010
    ACTUATOR_MULTI_TURN = 0x020
    INVERTOR_TEMPERATURE_SENSOR = 0x040
    CAN_COMMUNICATION = 0x080
    ACTUATOR_TEMPERATURE_SENSOR = 0x100
    STEP_OVER = 0x200
    DRV_PROTECTION = 0x400
    CODER_DISABLED = 0x800
    ACTUATOR_DISCONNECTION = 0x801
    CAN_DISCONNECTION = 0x802
    IP_ADDRESS_NOT_FOUND = 0x803
    ABNORMAL_SHUTDOWN = 0x804
    SHUTDOWN_SAVING = 0x805
    IP_HAS_BIND = 0x806
    ID_NOT_UNIQUE = 0x807
    IP_CONFLICT = 0x808
    UNKNOWN = 0xFFFF


_ERROR_FLAGS = tuple(
    code for code in ErrorCode if code != ErrorCode.NONE and code <= ErrorCode.CODER_DISABLED
)


class OnlineStatus(IntEnum):
    """Whether an actuator answers."""

    OFFLINE = 0x00
    ONLINE = 0x01


class SwitchStatus(IntEnum):
    """Power state of an actuator."""

    OFF = 0
    ON = 1


class ChartSwitchStatus(IntEnum):
    """Whether chart data is streamed."""

    OFF = 0
    ON = 1


class CurrentChart(IntEnum):
    """Which current component the current chart shows."""

    IQ_CHART = 0
    ID_CHART = 1


class HomingOperationMode(IntEnum):
    """How the zero position is found."""

    AUTO = 0
    MANUAL = 1


class CommunicationType(IntEnum):
    """Transport used to reach the actuators."""

    ETHERNET = 0
    SERIAL_PORT = 1


class InitializeState(IntEnum):
    """Initialisation state of the controller."""

    UNINITIALIZED = 0
    INITIALIZED = 1


class OperationFlags(IntEnum):
    """Completion notices of controller operations."""

    RECOGNIZE_FINISHED = 0
    LAUNCH_FINISHED = 1
    CLOSE_FINISHED = 2
    SAVE_PARAMS_FINISHED = 3
    SAVE_PARAMS_FAILED = 4
    ATTRIBUTE_CHANGE_FINISHED = 5


class ActuatorMode(IntEnum):
    """Control mode of an actuator."""

    NONE = 0
    CURRENT = 1
    VELOCITY = 2
    POSITION = 3
    TEACHING = 4
    PROFILE_POSITION = 6
    PROFILE_VELOCITY = 7
    HOMING = 8


class ActuatorAttribute(IntEnum):
    """Identifiers of every actuator attribute."""

    CUR_IQ_SETTING = 0x01
    CUR_PROPORTIONAL = 0x02
    CUR_INTEGRAL = 0x03
    CUR_ID_SETTING = 0x04
    CUR_MINIMUM = 0x05
    CUR_MAXIMUM = 0x06
    CUR_NOMINAL = 0x07
    CUR_OUTPUT = 0x08
    CUR_MAXSPEED = 0x09
    ACTUAL_CURRENT = 0x0A
    VEL_SETTING = 0x0B
    VEL_PROPORTIONAL = 0x0C
    VEL_INTEGRAL = 0x0D
    VEL_OUTPUT_LIMITATION_MINIMUM = 0x0E
    VEL_OUTPUT_LIMITATION_MAXIMUM = 0x0F
    ACTUAL_VELOCITY = 0x10
    POS_SETTING = 0x11
    POS_PROPORTIONAL = 0x12
    POS_INTEGRAL = 0x13
    POS_DIFFERENTIAL = 0x14
    POS_OUTPUT_LIMITATION_MINIMUM = 0x15
    POS_OUTPUT_LIMITATION_MAXIMUM = 0x16
    POS_LIMITATION_MINIMUM = 0x17
    POS_LIMITATION_MAXIMUM = 0x18
    HOMING_POSITION = 0x19
    ACTUAL_POSITION = 0x1A
    PROFILE_POS_MAX_SPEED = 0x1B
    PROFILE_POS_ACC = 0x1C
    PROFILE_POS_DEC = 0x1D
    PROFILE_VEL_MAX_SPEED = 0x1E
    PROFILE_VEL_ACC = 0x1F
    PROFILE_VEL_DEC = 0x20
    CHART_FREQUENCY = 0x21
    CHART_THRESHOLD = 0x22
    CHART_SWITCH = 0x23
    POS_OFFSET = 0x24
    VOLTAGE = 0x25
    POS_LIMITATION_SWITCH = 0x26
    HOMING_CUR_MAXIMUM = 0x27
    HOMING_CUR_MINIMUM = 0x28
    CURRENT_SCALE = 0x29
    VELOCITY_SCALE = 0x2A
    FILTER_C_STATUS = 0x2B
    FILTER_C_VALUE = 0x2C
    FILTER_V_STATUS = 0x2D
    FILTER_V_VALUE = 0x2E
    FILTER_P_STATUS = 0x2F
    FILTER_P_VALUE = 0x30
    INERTIA = 0x31
    LOCK_ENERGY = 0x32
    ACTUATOR_TEMPERATURE = 0x33
    INVERTER_TEMPERATURE = 0x34
    ACTUATOR_PROTECT_TEMPERATURE = 0x35
    ACTUATOR_RECOVERY_TEMPERATURE = 0x36
    INVERTER_PROTECT_TEMPERATURE = 0x37
    INVERTER_RECOVERY_TEMPERATURE = 0x38
    CALIBRATION_SWITCH = 0x39
    CALIBRATION_ANGLE = 0x3A
    ACTUATOR_SWITCH = 0x3B
    FIRMWARE_VERSION = 0x3C
    ONLINE_STATUS = 0x3D
    DEVICE_ID = 0x3E
    SN_ID = 0x3F
    MODE_ID = 0x40
    ERROR_ID = 0x41
    CUMULATIVE_TIME = 0x42
    CURRENT_LIMIT = 0x43
    VELOCITY_LIMIT = 0x44
    ACTUATOR_BRAKE = 0x45
    COMMUNICATION_ID = 0x46
    INIT_STATE = 0x47
    LOADER_VERSION = 0x48
    VERSION_430 = 0x49
    FREQUENCY_430 = 0x4A
    RESERVE_0 = 0x4B
    RESERVE_1 = 0x4C
    RESERVE_2 = 0x4D
    RESERVE_3 = 0x4E
    RESERVE_4 = 0x4F
    RESERVE_5 = 0x50
    RESERVE_6 = 0x51
    RESERVE_7 = 0x52
    RESERVE_8 = 0x53
    DATA_CNT = 0x54
    DATA_CHART = 0x55
    DATA_INVALID = 0x56


class Directive(IntEnum):
    """Command identifiers of the actuator wire protocol."""

    HANDSHAKE = 0x00
    READ_VERSION = 0x01
    READ_ADDRESS = 0x02
    READ_CONFIG = 0x03
    READ_CUR_CURRENT = 0x04
    READ_CUR_VELOCITY = 0x05
    READ_CUR_POSITION = 0x06
    SET_MODE = 0x07
    SET_CURRENT = 0x08
    SET_VELOCITY = 0x09
    SET_POSITION = 0x0A
    SET_PAIRS = 0x0B
    SET_CURRENT_ID = 0x0C
    SAVE_PARAM = 0x0D
    SET_CURRENT_P = 0x0E
    SET_CURRENT_I = 0x0F
    SET_VELOCITY_P = 0x10
    SET_VELOCITY_I = 0x11
    SET_POSITION_P = 0x12
    SET_POSITION_I = 0x13
    SET_POSITION_D = 0x14
    READ_CUR_P = 0x15
    READ_CUR_I = 0x16
    READ_VEL_P = 0x17
    READ_VEL_I = 0x18
    READ_POS_P = 0x19
    READ_POS_I = 0x1A
    READ_POS_D = 0x1B
    READ_PROFILE_POS_MAX_SPEED = 0x1C
    READ_PROFILE_POS_ACC = 0x1D
    READ_PROFILE_POS_DEC = 0x1E
    SET_PROFILE_POS_MAX_SPEED = 0x1F
    SET_PROFILE_POS_ACC = 0x20
    SET_PROFILE_POS_DEC = 0x21
    READ_PROFILE_VEL_MAX_SPEED = 0x22
    READ_PROFILE_VEL_ACC = 0x23
    READ_PROFILE_VEL_DEC = 0x24
    SET_PROFILE_VEL_MAX_SPEED = 0x25
    SET_PROFILE_VEL_ACC = 0x26
    SET_PROFILE_VEL_DEC = 0x27
    READ_CURRENT_MAXSPEED = 0x28
    SET_CURRENT_MAXSPEED = 0x29
    SET_SWITCH_MOTORS = 0x2A
    READ_MOTORS_SWITCH = 0x2B
    SET_MOTOR_MAC = 0x2C
    SET_CURRENT_PID_MIN = 0x2E
    SET_CURRENT_PID_MAX = 0x2F
    SET_VELOCITY_PID_MIN = 0x30
    SET_VELOCITY_PID_MAX = 0x31
    SET_POSITION_PID_MIN = 0x32
    SET_POSITION_PID_MAX = 0x33
    READ_CURRENT_PID_MIN = 0x34
    READ_CURRENT_PID_MAX = 0x35
    READ_VELOCITY_PID_MIN = 0x36
    READ_VELOCITY_PID_MAX = 0x37
    READ_POSITION_PID_MIN = 0x38
    READ_POSITION_PID_MAX = 0x39
    READ_CHANNEL_2 = 0x3A
    READ_CHANNEL_3 = 0x3B
    READ_CHANNEL_4 = 0x3C
    SET_DEVICE_ID = 0x3D
    SOFTWARE_CLOSE = 0x3E
    SET_CHART_THRESHOLD = 0x3F
    SET_CHART_FREQUENCY = 0x40
    READ_CHART_THRESHOLD = 0x41
    READ_CHART_FREQUENCY = 0x42
    CHART_DATA_START = 0x43
    CAN_CONNECT = 0x44
    READ_VOLTAGE = 0x45
    CHART_OPEN = 0x46
    CHART_CLOSE = 0x47
    CHANNEL2_OPEN = 0x48
    CHANNEL2_CLOSE = 0x49
    CHANNEL3_OPEN = 0x4A
    CHANNEL3_CLOSE = 0x4B
    CHANNEL4_OPEN = 0x4C
    CHANNEL4_CLOSE = 0x4D
    READ_CHANNEL_1 = 0x4E
    SET_VOLTAGE = 0x4F
    CRC_ERROR = 0x50
    CHANNEL1_OPEN = 0x51
    CHANNEL1_CLOSE = 0x52
    READ_CURRENT_SCALE = 0x53
    SET_CUR_TRIGGER_MODE = 0x54
    READ_MOTOR_MODE = 0x55
    SET_CURRENT_LIMIT = 0x58
    READ_CURRENT_LIMIT = 0x59
    SET_VELOCITY_LIMIT = 0x5A
    READ_VELOCITY_LIMIT = 0x5B
    READ_TEMP_MOTOR = 0x5F
    READ_TEMP_INVERTER = 0x60
    SET_INVERTER_TEMP_PROTECT = 0x61
    READ_INVERTER_TEMP_PROTECT = 0x62
    SET_INVERTER_TEMP_RECOVERY = 0x63
    READ_INVERTER_TEMP_RECOVERY = 0x64
    SET_TEMP_PROTECT = 0x6B
    READ_TEMP_PROTECT = 0x6C
    SET_TEMP_RECOVERY = 0x6D
    READ_TEMP_RECOVERY = 0x6E
    READ_CUMULATIVE_TIME = 0x6F
    SET_FILTER_C_STATUS = 0x70
    READ_FILTER_C_STATUS = 0x71
    SET_FILTER_C_VALUE = 0x72
    READ_FILTER_C_VALUE = 0x73
    SET_FILTER_V_STATUS = 0x74
    READ_FILTER_V_STATUS = 0x75
    SET_FILTER_V_VALUE = 0x76
    READ_FILTER_V_VALUE = 0x77
    SET_FILTER_P_STATUS = 0x78
    READ_FILTER_P_STATUS = 0x79
    SET_FILTER_P_VALUE = 0x7A
    READ_FILTER_P_VALUE = 0x7B
    SET_INERTIA = 0x7C
    READ_INERTIA = 0x7D
    SET_LOCK_ENERGY = 0x7E
    READ_LOCK_ENERGY = 0x7F
    SET_MAX_POS = 0x83
    SET_MIN_POS = 0x84
    READ_MAX_POS = 0x85
    READ_MIN_POS = 0x86
    SET_HOMING_POS = 0x87
    CLEAR_HOMING = 0x88
    SET_POS_OFFSET = 0x89
    READ_POS_OFFSET = 0x8A
    READ_HOMING_LIMIT = 0x8B
    SET_HOMING_LIMIT = 0x8C
    SET_HOMING_OPERATION = 0x8D
    SET_HOMING_MIN = 0x8E
    SET_HOMING_MAX = 0x8F
    SET_HOMING_CUR_MIN = 0x90
    SET_HOMING_CUR_MAX = 0x91
    READ_HOMING_CUR_MIN = 0x92
    READ_HOMING_CUR_MAX = 0x93
    READ_ACTUAL_CVP = 0x94
    READ_LOADER_VERSION = 0x99
    SWITCH_CALIBRATION = 0xA0
    READ_CALIBRATION_SWITCH = 0xA1
    START_CALIBRATION = 0xA2
    SET_CALIBRATION_ANGLE = 0xA3
    READ_CALIBRATION_ANGLE = 0xA4
    SWITCH_CALIBRATION_VEL = 0xA5
    READ_LAST_STATE = 0xB0
    INIT_430 = 0xB1
    READ_430_VERSION = 0xB2
    SET_430_FREQUENCY = 0xB3
    READ_430_FREQUENCY = 0xB4
    READ_ACTUATOR_BRAKE = 0xB5
    SET_ACTUATOR_BRAKE = 0xB6
    IP_BROADCAST = 0xC0
    TMP_COMMAND = 0xC1
    READ_RESERVE_0 = 0xD0
    READ_RESERVE_1 = 0xD1
    READ_RESERVE_2 = 0xD2
    READ_RESERVE_3 = 0xD3
    READ_RESERVE_4 = 0xD4
    READ_RESERVE_5 = 0xD5
    READ_RESERVE_6 = 0xD6
    READ_RESERVE_7 = 0xD7
    READ_RESERVE_8 = 0xD8
    CLEAR_ERROR = 0xFE
    CHECK_ERROR = 0xFF
    INVALID = 0x100


def decode_error_flags(code: int) -> list[ErrorCode]:
    """Return the single-bit actuator errors set in ``code``, lowest bit first.

    Bits above ``ErrorCode.CODER_DISABLED`` are ignored.
    """
    value = int(code)
    if value < 0:
        raise ValueError("error code must not be negative")
    return [flag for flag in _ERROR_FLAGS if value & flag]