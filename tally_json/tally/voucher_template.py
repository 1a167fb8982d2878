from __future__ import annotations

from types import MappingProxyType
from typing import Any

"""Fixed Tally voucher-import schema constants.

Tally rejects vouchers that lack these keys, so every record carries the same
literal values. Each template below is a read-only mapping laid out in the
destination's key order; per-row slots hold ``None`` and are filled by the
voucher builder on a copy. Changing a constant here changes every record
of every run.
"""

__all__ = [
    "NOT_APPLICABLE",
    "VCHKEY_SUFFIX",
    "ALTERID_BASE",
    "MASTERID_BASE",
    "VOUCHERKEY_BASE",
    "VOUCHERRETAINKEY_BASE",
    "OLD_AUDIT_ENTRY_IDS",
    "VOUCHER_METADATA",
    "VOUCHER_TEMPLATE",
    "INVENTORY_ENTRY_TEMPLATE",
    "BATCH_ALLOCATION_TEMPLATE",
    "ACCOUNTING_ALLOCATION_TEMPLATE",
    "LEDGER_ENTRY_TEMPLATE",
]

# GST-class placeholder: U+0004 followed by " Not Applicable"
NOT_APPLICABLE = "\u0004 Not Applicable"
VCHKEY_SUFFIX = ":00000008"

# internal record ids: base + 0-based row index
ALTERID_BASE = 12317
MASTERID_BASE = 1740
VOUCHERKEY_BASE = 197469711368200
VOUCHERRETAINKEY_BASE = 6957

OLD_AUDIT_ENTRY_IDS: tuple[Any, ...] = ({"metadata": True, "type": "Number"}, "-1")

VOUCHER_METADATA: MappingProxyType[str, Any] = MappingProxyType({
    "type": "Voucher",
    "remoteid": None,
    "vchkey": None,
    "vchtype": None,
    "action": "Create",
    "objview": "Invoice Voucher View",
})

VOUCHER_TEMPLATE: MappingProxyType[str, Any] = MappingProxyType({
    "metadata": None,
    "oldauditentryids": None,
    "date": None,
    "vchstatusdate": None,
    "guid": None,
    "enteredby": "admin",
    "objectupdateaction": "Alter",
    "vouchertypename": None,
    "partyname": None,
    "partyledgername": None,
    "vouchernumber": None,
    "basicbuyername": None,
    "basicbasepartyname": None,
    "numberingstyle": "Manual",
    "cstformissuetype": NOT_APPLICABLE,
    "cstformrecvtype": NOT_APPLICABLE,
    "fbtpaymenttype": "Default",
    "persistedview": "Invoice Voucher View",
    "vchstatustaxadjustment": "Default",
    "vchstatusvouchertype": None,
    "basicbuyerssalestaxno": None,
    "basicduedateofpymt": "Cash",
    "vchgstclass": NOT_APPLICABLE,
    "vouchertypeorigname": None,
    "diffactualqty": False,
    "ismstfromsync": False,
    "isdeleted": False,
    "issecurityonwhenentered": True,
    "asoriginal": False,
    "audited": False,
    "iscommonparty": False,
    "forjobcosting": False,
    "isoptional": False,
    "effectivedate": None,
    "useforexcise": False,
    "isforjobworkin": False,
    "allowconsumption": False,
    "useforinterest": False,
    "useforgainloss": False,
    "useforgodowntransfer": False,
    "useforcompound": False,
    "useforservicetax": False,
    "isreversechargeapplicable": False,
    "issystem": False,
    "isfetchedonly": False,
    "isgstoverridden": False,
    "iscancelled": False,
    "isonhold": False,
    "issummary": False,
    "isecommercesupply": False,
    "isboenotapplicable": False,
    "isgstsecsevenapplicable": False,
    "ignoreeinvvalidation": False,
    "cmpgstisothterritoryassessee": False,
    "partygstisothterritoryassessee": False,
    "irnjsonexported": False,
    "irncancelled": False,
    "ignoregstconflictinmig": False,
    "isopbaltransaction": False,
    "ignoregstformatvalidation": False,
    "iseligibleforitc": True,
    "ignoregstoptionaluncertain": False,
    "updatesummaryvalues": False,
    "isewaybillapplicable": False,
    "isdeletedretained": False,
    "isnull": False,
    "isexcisevoucher": False,
    "excisetaxoverride": False,
    "usefortaxunittransfer": False,
    "isexer1nopoverwrite": False,
    "isexf2nopoverwrite": False,
    "isexer3nopoverwrite": False,
    "ignoreposvalidation": False,
    "exciseopening": False,
    "useforfinalproduction": False,
    "istdsoverridden": False,
    "istcsoverridden": False,
    "istdstcscashvch": False,
    "includeadvpymtvch": False,
    "issubworkscontract": False,
    "isvatoverridden": False,
    "ignoreorigvchdate": False,
    "isvatpaidatcustoms": False,
    "isdeclaredtocustoms": False,
    "vatadvancepayment": False,
    "vatadvpay": False,
    "iscstdelcaredgoodssales": False,
    "isvatrestaxinv": False,
    "isservicetaxoverridden": False,
    "isisdvoucher": False,
    "isexciseoverridden": False,
    "isexcisesupplyvch": False,
    "gstnotexported": False,
    "ignoregstinvalidation": False,
    "isgstrefund": False,
    "ovrdnewaybillapplicability": False,
    "isvatprincipalaccount": False,
    "vchstatusisvchnumused": False,
    "vchgststatusisincluded": False,
    "vchgststatusisuncertain": False,
    "vchgststatusisexcluded": False,
    "vchgststatusisapplicable": False,
    "vchgststatusisgstr2breconciled": False,
    "vchgststatusisgstr2bonlyinportal": False,
    "vchgststatusisgstr2bonlyinbooks": False,
    "vchgststatusisgstr2bmismatch": False,
    "vchgststatusisgstr2bindiffperiod": False,
    "vchgststatusisreteffdateoverrdn": False,
    "vchgststatusisoverrdn": False,
    "vchgststatusisstatindiffdate": False,
    "vchgststatusisretindiffdate": False,
    "vchgststatusmainsectionexcluded": False,
    "vchgststatusisbranchtransferout": False,
    "vchgststatusissystemsummary": False,
    "vchstatusisunregisteredrcm": False,
    "vchstatusisoptional": False,
    "vchstatusiscancelled": False,
    "vchstatusisdeleted": False,
    "vchstatusisopeningbalance": False,
    "vchstatusisfetchedonly": False,
    "vchgststatusisoptionaluncertain": False,
    "vchstatusisreacceptforhsndone": False,
    "vchstatusisreaccephsnsixonedone": False,
    "paymentlinkhasmultiref": False,
    "isshippingwithinstate": False,
    "isoverseastouristtrans": False,
    "isdesignatedzoneparty": False,
    "hascashflow": False,
    "ispostdated": False,
    "usetrackingnumber": False,
    "isinvoice": True,
    "mfgjournal": False,
    "hasdiscounts": False,
    "aspayslip": False,
    "iscostcentre": False,
    "isstxnonrealizedvch": False,
    "isexcisemanufactureron": False,
    "isblankcheque": False,
    "isvoid": False,
    "orderlinestatus": False,
    "vatisagnstcancsales": False,
    "vatispurcexempted": False,
    "isvatrestaxinvoice": False,
    "vatisassesablecalcvch": False,
    "isvatdutypaid": True,
    "isdeliverysameasconsignee": False,
    "isdispatchsameasconsignor": False,
    "isdeletedvchretained": False,
    "vchonlyaddlinfoupdated": False,
    "changevchmode": False,
    "resetirnqrcode": False,
    "alterid": None,
    "masterid": None,
    "voucherkey": None,
    "voucherretainkey": None,
    "vouchernumberseries": "Default",
    "allinventoryentries": None,
    "ledgerentries": None,
})

INVENTORY_ENTRY_TEMPLATE: MappingProxyType[str, Any] = MappingProxyType({
    "stockitemname": None,
    "isdeemedpositive": False,
    "isgstassessablevalueoverridden": False,
    "strdisgstapplicable": False,
    "contentnegispos": False,
    "islastdeemedpositive": False,
    "isautonegate": False,
    "iscustomsclearance": False,
    "istrackcomponent": False,
    "istrackproduction": False,
    "isprimaryitem": False,
    "isscrap": False,
    "rate": None,
    "amount": None,
    "actualqty": None,
    "billedqty": None,
    "batchallocations": None,
    "accountingallocations": None,
})

BATCH_ALLOCATION_TEMPLATE: MappingProxyType[str, Any] = MappingProxyType({
    "godownname": None,
    "batchname": None,
    "indentno": NOT_APPLICABLE,
    "orderno": NOT_APPLICABLE,
    "trackingnumber": NOT_APPLICABLE,
    "dynamiccstiscleared": False,
    "amount": None,
    "actualqty": None,
    "billedqty": None,
})

ACCOUNTING_ALLOCATION_TEMPLATE: MappingProxyType[str, Any] = MappingProxyType({
    "oldauditentryids": None,
    "ledgername": None,
    "gstclass": NOT_APPLICABLE,
    "isdeemedpositive": False,
    "ledgerfromitem": False,
    "removezeroentries": False,
    "ispartyledger": False,
    "gstoverridden": False,
    "isgstassessablevalueoverridden": False,
    "strdisgstapplicable": False,
    "strdgstispartyledger": False,
    "strdgstisdutyledger": False,
    "contentnegispos": False,
    "islastdeemedpositive": False,
    "iscapvattaxaltered": False,
    "iscapvatnotclaimed": False,
    "amount": None,
})

LEDGER_ENTRY_TEMPLATE: MappingProxyType[str, Any] = MappingProxyType({
    "oldauditentryids": None,
    "ledgername": None,
    "gstclass": NOT_APPLICABLE,
    "isdeemedpositive": True,
    "ledgerfromitem": False,
    "removezeroentries": False,
    "ispartyledger": True,
    "gstoverridden": False,
    "isgstassessablevalueoverridden": False,
    "strdisgstapplicable": False,
    "strdgstispartyledger": False,
    "strdgstisdutyledger": False,
    "contentnegispos": False,
    "islastdeemedpositive": True,
    "iscapvattaxaltered": False,
    "iscapvatnotclaimed": False,
    "amount": None,
})
